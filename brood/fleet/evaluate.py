"""Child evaluation - lifecycle verdict for one child.

Verdicts, checked in order:
    dead      registry status is dead
    failing   alive >= failing_age_hours with no revenue at all
    thriving  alive >= failing_age_hours and roi > thriving_roi
    growing   younger than failing_age_hours
    stable    everything else

roi = (earned - spent) / spent, inf with revenue and no spend, else 0.
"""
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from brood.config.policy import EvaluationPolicy
from brood.core.receipt import emit_receipt

from .registry import ChildAutomaton, ChildPerformanceRecord, ChildStatus, hours_since


class Verdict(Enum):
    """Evaluation verdicts. Recomputed every pass, never stored."""
    GROWING = "growing"
    STABLE = "stable"
    THRIVING = "thriving"
    FAILING = "failing"
    DEAD = "dead"


@dataclass
class ChildEvaluation:
    """One child's verdict and the numbers behind it."""
    child_id: str
    child_name: str
    status: str
    verdict: Verdict
    roi: float
    funded_amount_cents: int
    earned_cents: int
    spent_cents: int
    net_pnl_cents: int
    burn_rate_per_hour: float
    age_hours: float
    warnings: list[str] = field(default_factory=list)


def child_roi(earned_cents: int, spent_cents: int) -> float:
    if spent_cents > 0:
        return (earned_cents - spent_cents) / spent_cents
    return math.inf if earned_cents > 0 else 0.0


class ChildEvaluator:
    """Pure verdict computation over a child row and its performance record."""

    def __init__(
        self,
        policy: EvaluationPolicy | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.policy = policy or EvaluationPolicy()
        self.clock = clock

    def evaluate(
        self,
        child: ChildAutomaton,
        record: ChildPerformanceRecord | None = None,
        tenant_id: str = "default",
    ) -> ChildEvaluation:
        record = record or ChildPerformanceRecord()
        policy = self.policy

        try:
            age_hours = max(0.0, hours_since(child.created_at, self.clock()))
        except (AttributeError, TypeError, ValueError):
            age_hours = 0.0  # unreadable created_at: no age yet
        earned, spent = record.earned_cents, record.spent_cents
        roi = child_roi(earned, spent)
        mature = age_hours >= policy.failing_age_hours
        warnings = []

        if child.status == ChildStatus.DEAD:
            verdict = Verdict.DEAD
        elif mature and earned == 0:
            verdict = Verdict.FAILING
            warnings.append(f"No revenue after {round(age_hours)}h")
        elif mature and roi > policy.thriving_roi:
            verdict = Verdict.THRIVING
        elif not mature:
            verdict = Verdict.GROWING
        else:
            verdict = Verdict.STABLE

        funded = child.funded_amount_cents
        if verdict != Verdict.DEAD and funded > 0 and spent > funded * policy.burn_warning_ratio:
            warnings.append(f"Burned {round(spent / funded * 100)}% of funding")

        evaluation = ChildEvaluation(
            child_id=child.id,
            child_name=child.name,
            status=child.status.value,
            verdict=verdict,
            roi=roi,
            funded_amount_cents=funded,
            earned_cents=earned,
            spent_cents=spent,
            net_pnl_cents=earned - spent,
            burn_rate_per_hour=round(spent / age_hours, 2) if age_hours > 0 else 0.0,
            age_hours=round(age_hours, 1),
            warnings=warnings,
        )

        emit_receipt("child_evaluation", {
            "tenant_id": tenant_id,
            "child_id": child.id,
            "verdict": verdict.value,
            "roi": roi,
            "age_hours": evaluation.age_hours,
            "earned_cents": earned,
            "spent_cents": spent,
            "warnings": warnings,
        })

        return evaluation
