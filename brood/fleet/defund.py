"""Defund advice with hysteresis.

A child is only advised for defunding after it has been evaluated failing
on defund_warning_count consecutive passes. Each failing pass increments
and persists the child's warning counter; a recovery resets it.
"""
from dataclasses import dataclass

from brood.config.policy import EvaluationPolicy
from brood.core.receipt import emit_receipt

from .evaluate import ChildEvaluation, ChildEvaluator, Verdict
from .registry import ChildAutomaton, ChildRegistry


@dataclass
class DefundAdvice:
    defund: bool
    warning_count: int
    reason: str
    evaluation: ChildEvaluation | None = None


class DefundAdvisor:
    """Turns failing verdicts into warnings, and repeated warnings into advice."""

    def __init__(
        self,
        registry: ChildRegistry,
        evaluator: ChildEvaluator,
        policy: EvaluationPolicy | None = None,
    ):
        self.registry = registry
        self.evaluator = evaluator
        self.policy = policy or evaluator.policy

    def should_defund(
        self,
        child: ChildAutomaton | str,
        evaluation: ChildEvaluation | None = None,
        tenant_id: str = "default",
    ) -> DefundAdvice:
        """Advise on one child. Mutates the persisted warning counter.

        Args:
            child: ChildAutomaton or child id
            evaluation: Reuse an evaluation from the same pass

        Raises:
            ChildNotFound: unknown child id
        """
        if isinstance(child, str):
            child = self.registry.require_child(child)
        if evaluation is None:
            evaluation = self.evaluator.evaluate(
                child, self.registry.get_performance(child.id), tenant_id)

        count = self.registry.get_warning_count(child.id)
        threshold = self.policy.defund_warning_count

        if evaluation.verdict != Verdict.FAILING:
            recovered = evaluation.verdict != Verdict.DEAD
            if recovered and count and self.policy.reset_warnings_on_recovery:
                self.registry.set_warning_count(child.id, 0)
                emit_receipt("defund_reset", {
                    "tenant_id": tenant_id,
                    "child_id": child.id,
                    "previous_count": count,
                    "verdict": evaluation.verdict.value,
                })
                count = 0
            return DefundAdvice(
                defund=False,
                warning_count=count,
                reason=f"Not failing ({evaluation.verdict.value})",
                evaluation=evaluation,
            )

        count += 1
        self.registry.set_warning_count(child.id, count)
        detail = "; ".join(evaluation.warnings)

        if count >= threshold:
            advice = DefundAdvice(
                defund=True,
                warning_count=count,
                reason=f"Child {child.name} failing after {count} warnings: {detail}",
                evaluation=evaluation,
            )
            receipt_type = "defund_advice"
        else:
            advice = DefundAdvice(
                defund=False,
                warning_count=count,
                reason=f"Warning {count}/{threshold}: {detail}",
                evaluation=evaluation,
            )
            receipt_type = "defund_warning"

        emit_receipt(receipt_type, {
            "tenant_id": tenant_id,
            "child_id": child.id,
            "warning_count": count,
            "threshold": threshold,
            "defund": advice.defund,
            "reason": advice.reason,
        })

        return advice
