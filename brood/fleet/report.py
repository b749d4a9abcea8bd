"""Fleet report - evaluate every child and summarize the fleet.

Each report pass evaluates every child once, consults the defund advisor
once per child (advancing warning counters) and collects promotion
candidates from thriving children.
"""
import time
from dataclasses import dataclass, field
from typing import Callable

from brood.core.receipt import cents, emit_receipt, to_ts

from .defund import DefundAdvice, DefundAdvisor
from .evaluate import ChildEvaluation, ChildEvaluator, Verdict
from .promote import PromotableStrategy, StrategyPromoter, format_roi
from .registry import ChildRegistry, ChildStatus

RULE = "═" * 35


@dataclass
class FleetReport:
    """Aggregate view of the fleet at one point in time."""
    timestamp: str
    children: list[ChildEvaluation] = field(default_factory=list)
    total_funded_cents: int = 0
    total_earned_cents: int = 0
    total_roi: float = 0.0
    best_child: ChildEvaluation | None = None
    worst_child: ChildEvaluation | None = None
    recommendations: list[str] = field(default_factory=list)
    defund_advice: dict[str, DefundAdvice] = field(default_factory=dict)
    promotions: list[PromotableStrategy] = field(default_factory=list)


class FleetReporter:
    """Runs the evaluation pass over the registry."""

    def __init__(
        self,
        registry: ChildRegistry,
        evaluator: ChildEvaluator | None = None,
        advisor: DefundAdvisor | None = None,
        promoter: StrategyPromoter | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self.evaluator = evaluator or ChildEvaluator(clock=clock)
        self.advisor = advisor or DefundAdvisor(registry, self.evaluator)
        self.promoter = promoter or StrategyPromoter()
        self.clock = clock

    def evaluate_child(self, child_id: str, tenant_id: str = "default") -> ChildEvaluation:
        """Evaluate one child by id. Raises ChildNotFound."""
        child = self.registry.require_child(child_id)
        return self.evaluator.evaluate(child, self.registry.get_performance(child_id), tenant_id)

    def generate_report(self, tenant_id: str = "default") -> FleetReport:
        """Evaluate the whole fleet. Advances defund warning counters."""
        report = FleetReport(timestamp=to_ts(self.clock()))
        evaluated = []

        for child in self.registry.list_children():
            evaluation = self.evaluator.evaluate(
                child, self.registry.get_performance(child.id), tenant_id)
            advice = self.advisor.should_defund(child, evaluation, tenant_id)
            evaluated.append((child, evaluation))
            report.children.append(evaluation)
            report.defund_advice[child.id] = advice

        report.total_funded_cents = sum(e.funded_amount_cents for e in report.children)
        report.total_earned_cents = sum(e.earned_cents for e in report.children)
        if report.total_funded_cents > 0:
            report.total_roi = round(
                (report.total_earned_cents - report.total_funded_cents) / report.total_funded_cents, 2)

        alive = [e for e in report.children if e.verdict != Verdict.DEAD]
        if alive:
            report.best_child = max(alive, key=lambda e: e.roi)
            report.worst_child = min(alive, key=lambda e: e.roi)

        report.promotions = self.promoter.identify(evaluated, tenant_id)
        report.recommendations = self._recommend(report)

        emit_receipt("fleet_report", {
            "tenant_id": tenant_id,
            "child_count": len(report.children),
            "total_funded_cents": report.total_funded_cents,
            "total_earned_cents": report.total_earned_cents,
            "total_roi": report.total_roi,
            "verdicts": {e.child_id: e.verdict.value for e in report.children},
            "recommendation_count": len(report.recommendations),
        })

        return report

    def apply_defunds(self, report: FleetReport, tenant_id: str = "default") -> list[str]:
        """Mark every child advised for defunding as dead. Returns their ids."""
        defunded = []
        for child_id, advice in report.defund_advice.items():
            if advice.defund:
                self.registry.update_status(child_id, ChildStatus.DEAD, advice.reason, tenant_id)
                defunded.append(child_id)
        return defunded

    def _recommend(self, report: FleetReport) -> list[str]:
        if not report.children:
            return ["No children spawned yet. Consider replication if profitable."]

        recommendations = []
        for evaluation in report.children:
            advice = report.defund_advice.get(evaluation.child_id)
            if advice is None or evaluation.verdict != Verdict.FAILING:
                continue
            if advice.defund:
                recommendations.append(
                    f"Defund {evaluation.child_name} ({evaluation.child_id}): {advice.reason}")
            else:
                recommendations.append(
                    f"Consider defunding {evaluation.child_name} ({evaluation.child_id}): {advice.reason}")

        for promo in report.promotions:
            recommendations.append(f"Promote strategies from {promo.child_name}: {promo.evidence}")

        return recommendations


def format_report(report: FleetReport) -> str:
    """Plain-text rendering of a FleetReport."""
    lines = [RULE, "     CHILD EVALUATION REPORT", RULE, ""]

    if not report.children:
        lines.append("No children to evaluate.")
        for r in report.recommendations:
            lines.append(f"  - {r}")
        return "\n".join(lines)

    lines.append(f"Total Funded: {cents(report.total_funded_cents)}")
    lines.append(f"Total Earned: {cents(report.total_earned_cents)}")
    lines.append(f"Overall ROI: {format_roi(report.total_roi)}")
    if report.best_child is not None:
        lines.append(f"Best: {report.best_child.child_name} ({format_roi(report.best_child.roi)})")
    if report.worst_child is not None:
        lines.append(f"Worst: {report.worst_child.child_name} ({format_roi(report.worst_child.roi)})")
    lines.append("")

    for e in report.children:
        lines.append(f"[{e.verdict.value.upper()}] {e.child_name} ({e.child_id}) status={e.status}")
        lines.append(
            f"   Funded: {cents(e.funded_amount_cents)} | Earned: {cents(e.earned_cents)} | "
            f"Spent: {cents(e.spent_cents)} | ROI: {format_roi(e.roi)}"
        )
        lines.append(
            f"   Burn: ${e.burn_rate_per_hour / 100:.4f}/hr | Alive: {e.age_hours:.1f}h")
        if e.warnings:
            lines.append(f"   Warnings: {'; '.join(e.warnings)}")
        lines.append("")

    if report.recommendations:
        lines.append("-- Recommendations --")
        for r in report.recommendations:
            lines.append(f"  - {r}")

    lines.append(RULE)
    return "\n".join(lines)
