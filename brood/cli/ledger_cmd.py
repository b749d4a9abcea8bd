"""Ledger commands: log, summary."""
import sys

import click

from brood.core.receipt import StopRule, cents
from brood.ledger.revenue import EXPENSE_TYPES, INCOME_TYPES

from .context import get_brood
from .output import error_box, success_box, table


@click.group()
def ledger():
    """Revenue ledger operations."""
    pass


@ledger.command()
@click.argument('event_type', type=click.Choice(sorted(INCOME_TYPES | EXPENSE_TYPES)))
@click.argument('amount_cents', type=int)
@click.argument('source')
@click.option('--description', default='', help='Free-text description')
@click.pass_context
def log(ctx, event_type: str, amount_cents: int, source: str, description: str):
    """Record an income or expense event."""
    try:
        event = get_brood(ctx).ledger.log_event(event_type, amount_cents, source, description)
        success_box("Ledger Event Logged", [
            ("ID", event.id),
            ("Type", f"{event.type} ({event.category})"),
            ("Amount", cents(event.amount_cents)),
            ("Source", event.source),
        ], "brood ledger summary")
        sys.exit(0)

    except StopRule as e:
        error_box("Ledger Log: REFUSED", str(e))
        sys.exit(1)
    except Exception as e:
        error_box("Ledger Log: ERROR", str(e))
        sys.exit(2)


@ledger.command()
@click.option('--balance', 'balance_cents', type=int, default=None,
              help='Parent balance in cents, for runway projection')
@click.pass_context
def summary(ctx, balance_cents: int | None):
    """Show P&L, top sources and runway."""
    try:
        revenue = get_brood(ctx).ledger
        pnl = revenue.get_all_time_pnl()
        daily = revenue.get_daily_pnl()

        rows = [
            ("Revenue", cents(pnl.total_revenue_cents)),
            ("Expenses", cents(pnl.total_expense_cents)),
            ("Net", cents(pnl.net_pnl_cents)),
            ("Ratio", f"{pnl.profitability_ratio}x"),
            ("Last 24h Net", cents(daily.net_pnl_cents)),
            ("Events", str(pnl.event_count)),
        ]
        if balance_cents is not None:
            runway = revenue.project_runway(balance_cents)
            hours = "infinite" if runway.runway_hours is None else f"{runway.runway_hours}h"
            rows.append(("Runway", hours))
        success_box("Ledger Summary", rows, "brood spawn --balance <cents>")

        sources = revenue.get_top_revenue_sources()
        if sources:
            table(["Source", "Revenue"], [[s.source, cents(s.amount_cents)] for s in sources])
        sys.exit(0)

    except Exception as e:
        error_box("Ledger Summary: ERROR", str(e))
        sys.exit(2)
