"""Niche scoring - where is a new child least crowded?

score = round(demand * (1 - competition), 2)

Every catalog niche starts at demand 0.5, competition 0. Each living child
whose genesis prompt names the niche adds 0.5 competition, so two children
saturate it. Caller-supplied known niches raise demand (catalog) or join the
list at demand 0.8. Ties keep catalog order.
"""
from dataclasses import dataclass

from brood.core.constants import (
    FOCUS_AREAS,
    NICHE_BASE_DEMAND,
    NICHE_COMPETITION_STEP,
    NICHE_DEMAND_BOOST,
    NICHE_KNOWN_DEMAND,
)
from brood.fleet.registry import ChildAutomaton, ChildStatus


@dataclass
class NicheInfo:
    """Estimated demand and competition for one niche."""
    niche: str
    demand: float
    competition: float
    score: float = 0.0


def mentions_niche(prompt: str, niche: str) -> bool:
    """Case-insensitive search allowing '-' and ' ' to stand for each other."""
    text = prompt.lower()
    name = niche.lower()
    return name in text or name.replace("-", " ") in text


def detect_niches(
    children: list[ChildAutomaton],
    known_niches: list[str] | None = None,
    catalog: list[str] | None = None,
) -> list[NicheInfo]:
    """Score the niche catalog against the current fleet.

    Args:
        children: Current children (dead ones are ignored)
        known_niches: External demand signal, niche names
        catalog: Niche catalog (defaults to FOCUS_AREAS)

    Returns:
        NicheInfo list sorted by score, highest first
    """
    niches = [
        NicheInfo(niche=name, demand=NICHE_BASE_DEMAND, competition=0.0)
        for name in (catalog or FOCUS_AREAS)
    ]

    for child in children:
        if child.status == ChildStatus.DEAD:
            continue
        prompt = child.genesis_prompt or ""
        for n in niches:
            if mentions_niche(prompt, n.niche):
                n.competition = min(1.0, n.competition + NICHE_COMPETITION_STEP)

    for known in known_niches or []:
        existing = next((n for n in niches if n.niche == known), None)
        if existing:
            existing.demand = min(1.0, existing.demand + NICHE_DEMAND_BOOST)
        else:
            niches.append(NicheInfo(niche=known, demand=NICHE_KNOWN_DEMAND, competition=0.0))

    for n in niches:
        n.score = round(n.demand * (1 - n.competition), 2)

    # sorted() is stable: equal scores keep catalog order
    return sorted(niches, key=lambda n: n.score, reverse=True)
