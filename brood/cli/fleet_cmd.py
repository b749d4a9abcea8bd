"""Fleet commands: children, fund, status, report, record."""
import sys

import click

from brood.core.receipt import ChildNotFound, StopRule, cents

from .context import get_brood
from .output import error_box, success_box, table, text_box


@click.command()
@click.pass_context
def children(ctx):
    """List registered children."""
    try:
        brood = get_brood(ctx)
        rows = []
        for child in brood.registry.list_children():
            perf = brood.registry.get_performance(child.id)
            rows.append([
                child.id, child.name, child.status.value,
                cents(child.funded_amount_cents),
                cents(perf.earned_cents), cents(perf.spent_cents),
            ])

        if not rows:
            click.echo("No children.")
            click.echo("Next: brood spawn --balance <cents>")
            sys.exit(0)

        table(["ID", "Name", "Status", "Funded", "Earned", "Spent"], rows)
        sys.exit(0)

    except Exception as e:
        error_box("Children: ERROR", str(e))
        sys.exit(2)


@click.command()
@click.argument('child_id')
@click.argument('amount_cents', type=int)
@click.option('--balance', 'balance_cents', type=int, required=True,
              help='Parent balance in cents')
@click.pass_context
def fund(ctx, child_id: str, amount_cents: int, balance_cents: int):
    """Transfer AMOUNT_CENTS of funding to CHILD_ID."""
    try:
        from brood.tools import fund_child

        text = fund_child(get_brood(ctx), child_id, amount_cents, balance_cents)
        if text.startswith("Refused"):
            error_box("Fund: REFUSED", text)
            sys.exit(1)
        text_box("Fund: OK", text, f"brood status {child_id}")
        sys.exit(0)

    except ChildNotFound as e:
        error_box("Fund: NOT FOUND", str(e), "brood children")
        sys.exit(1)
    except StopRule as e:
        error_box("Fund: REFUSED", str(e))
        sys.exit(1)
    except Exception as e:
        error_box("Fund: ERROR", str(e))
        sys.exit(2)


@click.command()
@click.argument('child_id')
@click.pass_context
def status(ctx, child_id: str):
    """Evaluate one child."""
    try:
        from brood.tools import check_child_status

        text = check_child_status(get_brood(ctx), child_id)
        text_box(f"Child Status: {child_id}", text, "brood report")
        sys.exit(0)

    except ChildNotFound as e:
        error_box("Status: NOT FOUND", str(e), "brood children")
        sys.exit(1)
    except Exception as e:
        error_box("Status: ERROR", str(e))
        sys.exit(2)


@click.command()
@click.pass_context
def report(ctx):
    """Evaluate the whole fleet (advances defund warnings)."""
    try:
        from brood.tools import replication_report

        click.echo(replication_report(get_brood(ctx)))
        sys.exit(0)

    except Exception as e:
        error_box("Report: ERROR", str(e))
        sys.exit(2)


@click.command()
@click.argument('child_id')
@click.option('--earned', 'earned_cents', type=int, default=0, help='Cents earned since last record')
@click.option('--spent', 'spent_cents', type=int, default=0, help='Cents spent since last record')
@click.pass_context
def record(ctx, child_id: str, earned_cents: int, spent_cents: int):
    """Add reported earnings and spend to a child's record."""
    try:
        perf = get_brood(ctx).recorder.record(child_id, earned_cents, spent_cents)
        success_box("Performance Recorded", [
            ("Child", child_id),
            ("Earned", cents(perf.earned_cents)),
            ("Spent", cents(perf.spent_cents)),
            ("Updates", str(perf.updates)),
        ], f"brood status {child_id}")
        sys.exit(0)

    except ChildNotFound as e:
        error_box("Record: NOT FOUND", str(e), "brood children")
        sys.exit(1)
    except StopRule as e:
        error_box("Record: REFUSED", str(e))
        sys.exit(1)
    except Exception as e:
        error_box("Record: ERROR", str(e))
        sys.exit(2)
