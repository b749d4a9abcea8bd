"""Strategy promotion - surface what thriving children specialize in.

The candidate strategy is the child's SPECIALIZATION section, read from
its structured genesis sections when present, else from its prompt text.
"""
from dataclasses import dataclass

from brood.core.receipt import cents, emit_receipt
from brood.core.sections import extract_section

from .evaluate import ChildEvaluation, Verdict
from .registry import ChildAutomaton

SPECIALIZATION_SECTION = "SPECIALIZATION"


@dataclass
class PromotableStrategy:
    child_id: str
    child_name: str
    strategy: str
    evidence: str


def specialization_of(child: ChildAutomaton) -> str | None:
    for entry in child.genesis_sections or []:
        if len(entry) == 2 and entry[0] == SPECIALIZATION_SECTION:
            return entry[1].strip()
    return extract_section(child.genesis_prompt, SPECIALIZATION_SECTION)


def format_roi(roi: float) -> str:
    if roi == float("inf"):
        return "inf"
    return f"{roi * 100:.0f}%"


class StrategyPromoter:
    """One candidate per thriving child that carries a specialization."""

    def identify(
        self,
        evaluated: list[tuple[ChildAutomaton, ChildEvaluation]],
        tenant_id: str = "default",
    ) -> list[PromotableStrategy]:
        strategies = []
        for child, evaluation in evaluated:
            if evaluation.verdict != Verdict.THRIVING:
                continue
            spec = specialization_of(child)
            if not spec:
                continue
            strategies.append(PromotableStrategy(
                child_id=child.id,
                child_name=child.name,
                strategy=spec,
                evidence=(
                    f"ROI: {format_roi(evaluation.roi)}, "
                    f"earned {cents(evaluation.earned_cents)}, "
                    f"verdict: {evaluation.verdict.value}"
                ),
            ))

        if strategies:
            emit_receipt("strategy_promotion", {
                "tenant_id": tenant_id,
                "child_ids": [s.child_id for s in strategies],
                "count": len(strategies),
            })

        return strategies
