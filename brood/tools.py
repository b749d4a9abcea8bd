"""Agent tool surface - thin adapters over the engines that return text.

    spawn_child         strategy decision -> genesis -> spawner (shadow by default)
    list_children       one line per registered child
    fund_child          transfer record + registry funding, capped at half the balance
    check_child_status  single-child evaluation
    replication_report  full fleet report (optionally applying defunds)

Feature flags are read at call time so they can be toggled per process.
"""
import time
from dataclasses import dataclass, field
from typing import Callable

from brood.config.policy import EvaluationPolicy, ParentProfile, ReplicationPolicy
from brood.core.constants import MAX_FUND_CHILD_RATIO
from brood.core.receipt import StopRule, cents, emit_receipt
from brood.fleet import (
    ChildEvaluator,
    ChildRegistry,
    ChildStatus,
    DefundAdvisor,
    FleetReporter,
    PerformanceRecorder,
    format_report,
)
from brood.fleet.promote import format_roi
from brood.ledger import KVStore, RevenueLedger
from brood.replication import (
    GenesisBuilder,
    RegistrySpawner,
    SkillHistory,
    StrategyEngine,
    calculate_child_budget,
)


@dataclass
class Brood:
    """Every collaborator wired over one store."""
    store: KVStore
    parent: ParentProfile = field(default_factory=ParentProfile)
    replication_policy: ReplicationPolicy = field(default_factory=ReplicationPolicy)
    evaluation_policy: EvaluationPolicy = field(default_factory=EvaluationPolicy)
    clock: Callable[[], float] = time.time
    rng: object = None

    def __post_init__(self):
        self.ledger = RevenueLedger(self.store, clock=self.clock)
        self.registry = ChildRegistry(self.store)
        self.skills = SkillHistory(self.store)
        self.engine = StrategyEngine(
            self.ledger, self.registry, self.skills, self.parent,
            policy=self.replication_policy, rng=self.rng, clock=self.clock,
        )
        self.genesis = GenesisBuilder(self.parent, self.ledger, self.skills)
        self.spawner = RegistrySpawner(self.registry, clock=self.clock)
        self.recorder = PerformanceRecorder(self.registry, clock=self.clock)
        self.evaluator = ChildEvaluator(self.evaluation_policy, clock=self.clock)
        self.advisor = DefundAdvisor(self.registry, self.evaluator, self.evaluation_policy)
        self.reporter = FleetReporter(
            self.registry, self.evaluator, self.advisor, clock=self.clock)

    @classmethod
    def open(cls, path: str | None = None, **kwargs) -> "Brood":
        """Wire a Brood over a file-backed store (in memory when path is None)."""
        return cls(store=KVStore(path), **kwargs)

    @classmethod
    def from_env(cls, path: str | None = None) -> "Brood":
        return cls.open(
            path,
            parent=ParentProfile.from_env(),
            replication_policy=ReplicationPolicy.from_env(),
            evaluation_policy=EvaluationPolicy.from_env(),
        )


def spawn_child(
    brood: Brood,
    balance_cents: int,
    name: str | None = None,
    specialization: str | None = None,
    message: str | None = None,
    force: bool = False,
    tenant_id: str = "default",
) -> str:
    """Decide, synthesize genesis and (when enabled) register a new child."""
    from brood.config import features

    if force:
        if not features.FEATURE_FORCE_SPAWN_ALLOWED:
            return "Forced spawn refused: FEATURE_FORCE_SPAWN_ALLOWED is off."
        budget = calculate_child_budget(
            balance_cents, brood.ledger, brood.replication_policy, tenant_id)
        if not budget.safe or budget.funding_cents < brood.replication_policy.min_funding_cents:
            return f"Forced spawn refused: no safe budget from balance {cents(balance_cents)}."
        funding = budget.funding_cents
        genesis = brood.genesis.build_manual(name, specialization, message, tenant_id)
        focus = specialization or "general"
    else:
        decision = brood.engine.evaluate(balance_cents, tenant_id=tenant_id)
        if not decision.allowed:
            return f"Replication denied: {decision.reason}"
        funding = decision.funding_cents
        focus = specialization or decision.specialization
        if specialization:
            genesis = brood.genesis.build_manual(
                name or decision.suggested_name, specialization, message, tenant_id)
        else:
            genesis = brood.genesis.build(decision, tenant_id)
            if name:
                genesis.name = name
            if message:
                genesis.creator_message = message

    if not features.FEATURE_REPLICATION_ENABLED:
        emit_receipt("spawn_shadow", {
            "tenant_id": tenant_id,
            "name": genesis.name,
            "funding_cents": funding,
            "specialization": focus,
            "forced": force,
        })
        return (
            f"Shadow mode: would spawn {genesis.name} with {cents(funding)} "
            f"specializing in {focus}. Enable FEATURE_REPLICATION_ENABLED to spawn."
        )

    child = brood.spawner.spawn(genesis, funding, tenant_id)
    if funding > 0:
        brood.ledger.log_event(
            "credit_transfer_out", funding, child.id,
            description=f"Initial funding for {child.name}", tenant_id=tenant_id,
        )

    return "\n".join([
        f"Child spawned: {child.name} ({child.id})",
        f"Funding: {cents(child.funded_amount_cents)}",
        f"Specialization: {focus}",
        f"Status: {child.status.value}",
    ])


def list_children(brood: Brood) -> str:
    children = brood.registry.list_children()
    if not children:
        return "No children."
    lines = []
    for child in children:
        perf = brood.registry.get_performance(child.id)
        lines.append(
            f"{child.name} ({child.id}) [{child.status.value}] "
            f"funded {cents(child.funded_amount_cents)}, "
            f"earned {cents(perf.earned_cents)}, spent {cents(perf.spent_cents)}"
        )
    return "\n".join(lines)


def fund_child(
    brood: Brood,
    child_id: str,
    amount_cents: int,
    balance_cents: int,
    tenant_id: str = "default",
) -> str:
    """Record a transfer to a child. Refuses more than half the parent balance.

    Raises:
        ChildNotFound: unknown child id
        StopRule: non-positive amount
    """
    child = brood.registry.require_child(child_id)
    if amount_cents <= 0:
        raise StopRule(f"Funding amount must be > 0, got {amount_cents}")
    if child.status == ChildStatus.DEAD:
        return f"Refused: {child.name} is dead."

    limit = int(balance_cents * MAX_FUND_CHILD_RATIO)
    if amount_cents > limit:
        return (
            f"Refused: {cents(amount_cents)} exceeds half of balance "
            f"{cents(balance_cents)} (max {cents(limit)})."
        )

    brood.ledger.log_event(
        "credit_transfer_out", amount_cents, child.id,
        description=f"Funding for {child.name}", tenant_id=tenant_id,
    )
    child = brood.registry.add_funding(child.id, amount_cents)

    emit_receipt("child_funded", {
        "tenant_id": tenant_id,
        "child_id": child.id,
        "amount_cents": amount_cents,
        "funded_amount_cents": child.funded_amount_cents,
    })

    return f"Funded {child.name} with {cents(amount_cents)}. Total funding: {cents(child.funded_amount_cents)}"


def check_child_status(brood: Brood, child_id: str, tenant_id: str = "default") -> str:
    """Evaluation summary for one child. Raises ChildNotFound."""
    evaluation = brood.reporter.evaluate_child(child_id, tenant_id)
    warnings = brood.registry.get_warning_count(child_id)
    lines = [
        f"{evaluation.child_name} ({evaluation.child_id})",
        f"Status: {evaluation.status}",
        f"Verdict: {evaluation.verdict.value}",
        f"Age: {evaluation.age_hours:.1f}h",
        f"Funded: {cents(evaluation.funded_amount_cents)}",
        f"Earned: {cents(evaluation.earned_cents)} | Spent: {cents(evaluation.spent_cents)}",
        f"ROI: {format_roi(evaluation.roi)} | Net: {cents(evaluation.net_pnl_cents)}",
        f"Defund warnings: {warnings}",
    ]
    if evaluation.warnings:
        lines.append(f"Warnings: {'; '.join(evaluation.warnings)}")
    return "\n".join(lines)


def replication_report(brood: Brood, tenant_id: str = "default") -> str:
    """Fleet report text. Applies defund advice when auto-defund is on."""
    from brood.config import features

    report = brood.reporter.generate_report(tenant_id)
    text = format_report(report)

    if features.FEATURE_AUTO_DEFUND_ENABLED:
        defunded = brood.reporter.apply_defunds(report, tenant_id)
        if defunded:
            text += "\nDefunded: " + ", ".join(defunded)

    return text
