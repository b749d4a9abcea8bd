"""Profitability gate - may the parent replicate at all?

First and cheapest gate. ratio = lifetime revenue / lifetime expenses,
profitable when ratio >= MIN_PROFITABILITY_RATIO.
"""
from dataclasses import dataclass

from brood.core.constants import MIN_PROFITABILITY_RATIO
from brood.core.receipt import cents
from brood.ledger.revenue import profitability_ratio


@dataclass
class ProfitabilityCheck:
    """Outcome of the profitability gate."""
    profitable: bool
    ratio: float
    total_revenue_cents: int
    total_expense_cents: int


def check_profitability(ledger, min_ratio: float = MIN_PROFITABILITY_RATIO) -> ProfitabilityCheck:
    """Evaluate lifetime P&L from the ledger oracle.

    Args:
        ledger: Anything exposing get_all_time_pnl()
        min_ratio: Minimum revenue/expense ratio

    Returns:
        ProfitabilityCheck
    """
    pnl = ledger.get_all_time_pnl()
    ratio = profitability_ratio(pnl.total_revenue_cents, pnl.total_expense_cents)

    return ProfitabilityCheck(
        profitable=ratio >= min_ratio,
        ratio=ratio,
        total_revenue_cents=pnl.total_revenue_cents,
        total_expense_cents=pnl.total_expense_cents,
    )


def denial_reason(check: ProfitabilityCheck, min_ratio: float = MIN_PROFITABILITY_RATIO) -> str:
    """Human-readable reason for a failed profitability gate."""
    return (
        f"Not profitable enough. Ratio: {check.ratio:.2f}x (need {min_ratio}x). "
        f"Revenue: {cents(check.total_revenue_cents)}, "
        f"Expenses: {cents(check.total_expense_cents)}"
    )
