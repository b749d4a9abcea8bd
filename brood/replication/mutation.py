"""Mutation - small behavioral variations between parent and child.

One generator, two entropy sources:
    random.Random()          production, fresh every spawn
    LinearCongruential(seed) deterministic stream for replay and tests

Draw order is fixed: model gate, model pick, focus gate, focus pick,
temperature, exploration. Picks are only drawn when their gate passes.
"""
import random
from dataclasses import asdict, dataclass

from brood.config.policy import ReplicationPolicy
from brood.core.constants import (
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    TEMPERATURE_OFFSET_RANGE,
)
from brood.core.receipt import emit_receipt


@dataclass(frozen=True)
class MutationSet:
    """Variations applied to a child. Frozen once generated."""
    model_preference: str | None = None
    focus_area: str | None = None
    temperature_offset: float = 0.0
    exploration_rate: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


class LinearCongruential:
    """Seeded LCG: state = (state * 9301 + 49297) mod 233280."""

    def __init__(self, seed: int):
        self.state = int(seed) % LCG_MODULUS

    def random(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS


def _pick(rng, options: list[str]) -> str:
    index = min(int(rng.random() * len(options)), len(options) - 1)
    return options[index]


def generate_mutations(
    current_model: str,
    rng=None,
    policy: ReplicationPolicy | None = None,
    tenant_id: str = "default",
) -> MutationSet:
    """Generate a MutationSet from an entropy source.

    Args:
        current_model: Parent's inference model, never offered back
        rng: Object with random() -> [0, 1); random.Random() when None
        policy: Mutation rates and option lists

    Returns:
        MutationSet
    """
    rng = rng or random.Random()
    policy = policy or ReplicationPolicy()

    model_preference = None
    if rng.random() < policy.model_mutation_rate:
        others = [m for m in policy.model_options if m != current_model]
        if others:
            model_preference = _pick(rng, others)

    focus_area = None
    if rng.random() < policy.focus_mutation_rate and policy.focus_areas:
        focus_area = _pick(rng, policy.focus_areas)

    spread = TEMPERATURE_OFFSET_RANGE * 2
    mutations = MutationSet(
        model_preference=model_preference,
        focus_area=focus_area,
        temperature_offset=round(rng.random() * spread - TEMPERATURE_OFFSET_RANGE, 2),
        exploration_rate=round(rng.random(), 2),
    )

    emit_receipt("mutation", {
        "tenant_id": tenant_id,
        "parent_model": current_model,
        "deterministic": isinstance(rng, LinearCongruential),
        **mutations.to_dict(),
    })

    return mutations


def generate_mutations_deterministic(
    current_model: str,
    seed: int,
    policy: ReplicationPolicy | None = None,
) -> MutationSet:
    """Same seed, same MutationSet."""
    return generate_mutations(current_model, LinearCongruential(seed), policy)
