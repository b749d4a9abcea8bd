"""Replication Strategy Engine - one go/no-go decision per attempt.

Gate order is fixed and cheapest first:
    1. profitability   lifetime revenue/expense >= 1.10
    2. balance         >= MIN_BALANCE_FOR_REPLICATION
    3. budget          safe and >= MIN_CHILD_FUNDING_CENTS
Only when all three pass are specialization, niches, inheritance and
mutations computed. A denial is a value, never an exception.
"""
import string
import time
from dataclasses import dataclass
from typing import Callable

from brood.config.policy import ParentProfile, ReplicationPolicy
from brood.core.receipt import cents, emit_receipt

from .budget import ChildBudget, calculate_child_budget
from .inheritance import Inheritance, build_inheritance
from .mutation import MutationSet, generate_mutations
from .niches import NicheInfo, detect_niches
from .profitability import check_profitability, denial_reason
from .specialization import analyze_specialization

_BASE36 = string.digits + string.ascii_lowercase


@dataclass
class ReplicationDecision:
    """Outcome of one replication attempt. Denials carry only the reason."""
    allowed: bool
    reason: str
    specialization: str | None = None
    suggested_name: str | None = None
    funding_cents: int | None = None
    inherited_skills: list[str] | None = None
    mutations: MutationSet | None = None
    inheritance: Inheritance | None = None
    budget: ChildBudget | None = None
    niches: list[NicheInfo] | None = None


def base36(value: int) -> str:
    """Non-negative integer in base 36, lower-case."""
    if value <= 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class StrategyEngine:
    """Composition root for the replication decision.

    Collaborators are injected: the ledger oracle, the child registry,
    the skill/history oracle and the parent's profile. The entropy source
    for mutations and the clock can be swapped for deterministic runs.
    """

    def __init__(
        self,
        ledger,
        registry,
        skills,
        parent: ParentProfile,
        policy: ReplicationPolicy | None = None,
        rng=None,
        clock: Callable[[], float] = time.time,
    ):
        self.ledger = ledger
        self.registry = registry
        self.skills = skills
        self.parent = parent
        self.policy = policy or ReplicationPolicy()
        self.rng = rng
        self.clock = clock

    def evaluate(
        self,
        balance_cents: int,
        known_niches: list[str] | None = None,
        tenant_id: str = "default",
    ) -> ReplicationDecision:
        """Decide whether to replicate now and, if so, into what.

        Args:
            balance_cents: Parent's current balance
            known_niches: External demand signal for the niche scorer

        Returns:
            ReplicationDecision
        """
        policy = self.policy

        # 1. Profitability
        profit = check_profitability(self.ledger, policy.min_profitability_ratio)
        emit_receipt("profitability_check", {
            "tenant_id": tenant_id,
            "profitable": profit.profitable,
            "ratio": profit.ratio,
            "total_revenue_cents": profit.total_revenue_cents,
            "total_expense_cents": profit.total_expense_cents,
        })
        if not profit.profitable:
            return self._deny(denial_reason(profit, policy.min_profitability_ratio), tenant_id)

        # 2. Balance
        if balance_cents < policy.min_balance_cents:
            return self._deny(
                f"Balance too low: {cents(balance_cents)} (need {cents(policy.min_balance_cents)})",
                tenant_id,
            )

        # 3. Budget
        budget = calculate_child_budget(balance_cents, self.ledger, policy, tenant_id)
        if not budget.safe or budget.funding_cents < policy.min_funding_cents:
            runway = budget.parent_runway_after_funding_hours
            runway_text = f"{runway:.1f}" if runway is not None else "unknown"
            return self._deny(
                f"Insufficient budget for child. Max funding: {cents(budget.funding_cents)}, "
                f"parent runway would be {runway_text}h",
                tenant_id,
            )

        # 4. Specialization and niches
        analysis = analyze_specialization(self.ledger)
        niches = detect_niches(
            self.registry.living_children(), known_niches, catalog=policy.focus_areas,
        )
        emit_receipt("niche_scan", {
            "tenant_id": tenant_id,
            "niches": [{"niche": n.niche, "score": n.score} for n in niches],
            "revenue_specialization": analysis.suggested_specialization,
        })

        best = niches[0] if niches else None
        if best is not None and best.score > policy.niche_preference_score:
            specialization = best.niche
        else:
            specialization = analysis.suggested_specialization

        # 5. Inheritance and mutations
        inheritance = build_inheritance(self.ledger, self.skills)
        mutations = generate_mutations(
            self.parent.inference_model, self.rng, policy, tenant_id,
        )

        stamp = base36(int(self.clock() * 1000))[-4:]
        decision = ReplicationDecision(
            allowed=True,
            reason=(
                f"Profitable ({profit.ratio:.2f}x), budget {cents(budget.funding_cents)}, "
                f"specializing in {specialization}"
            ),
            specialization=specialization,
            suggested_name=f"{self.parent.name}-{specialization}-{stamp}",
            funding_cents=budget.funding_cents,
            inherited_skills=list(inheritance.skills),
            mutations=mutations,
            inheritance=inheritance,
            budget=budget,
            niches=niches,
        )

        emit_receipt("replication_decision", {
            "tenant_id": tenant_id,
            "allowed": True,
            "reason": decision.reason,
            "specialization": specialization,
            "suggested_name": decision.suggested_name,
            "funding_cents": decision.funding_cents,
        })

        return decision

    def _deny(self, reason: str, tenant_id: str) -> ReplicationDecision:
        emit_receipt("replication_decision", {
            "tenant_id": tenant_id,
            "allowed": False,
            "reason": reason,
        })
        return ReplicationDecision(allowed=False, reason=reason)
