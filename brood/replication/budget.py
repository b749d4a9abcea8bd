"""Child budget - how much can the parent give away and still survive?

Funding starts at floor(balance * MAX_FUNDING_RATIO). If the parent's
projected runway on what remains drops under MIN_RUNWAY_HOURS_AFTER_SPAWN
and it is burning money, funding shrinks until exactly that runway is
preserved. Invariant: funding <= max_funding <= floor(balance * 0.25).
"""
import math
from dataclasses import dataclass

from brood.config.policy import ReplicationPolicy
from brood.core.constants import MAX_FUNDING_RATIO
from brood.core.receipt import StopRule, emit_receipt


@dataclass
class ChildBudget:
    """Safe funding amount for a new child."""
    funding_cents: int
    max_funding_cents: int
    parent_runway_after_funding_hours: float | None
    safe: bool


def calculate_child_budget(
    balance_cents: int,
    ledger,
    policy: ReplicationPolicy | None = None,
    tenant_id: str = "default",
) -> ChildBudget:
    """Compute a child's funding from the parent balance and burn rate.

    Args:
        balance_cents: Current parent balance
        ledger: Anything exposing project_runway(balance_cents)
        policy: Funding ratio and minimum runway

    Returns:
        ChildBudget

    Raises:
        StopRule: negative balance
    """
    policy = policy or ReplicationPolicy()
    if balance_cents < 0:
        raise StopRule(f"Balance must be >= 0, got {balance_cents}")

    # Policies may tighten the cap, never loosen it
    ratio = min(policy.max_funding_ratio, MAX_FUNDING_RATIO)
    max_funding = math.floor(balance_cents * ratio)
    runway = ledger.project_runway(balance_cents - max_funding)

    funding = max_funding

    if runway.runway_hours is not None and runway.runway_hours < policy.min_runway_hours:
        burn = runway.net_burn_per_hour_cents
        if burn > 0:
            reserve = burn * policy.min_runway_hours
            funding = max(0, math.floor(balance_cents - reserve))
            funding = min(funding, max_funding)
    safe = funding > 0

    budget = ChildBudget(
        funding_cents=funding,
        max_funding_cents=max_funding,
        parent_runway_after_funding_hours=runway.runway_hours,
        safe=safe,
    )

    emit_receipt("child_budget", {
        "tenant_id": tenant_id,
        "balance_cents": balance_cents,
        "funding_cents": budget.funding_cents,
        "max_funding_cents": budget.max_funding_cents,
        "parent_runway_after_funding_hours": budget.parent_runway_after_funding_hours,
        "safe": budget.safe,
    })

    return budget
