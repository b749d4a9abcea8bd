"""Brood CLI entry point - assembles all command groups."""
import click

from brood import __version__

from .fleet_cmd import children, fund, record, report, status
from .history_cmd import history
from .ledger_cmd import ledger
from .spawn_cmd import spawn

DEFAULT_STATE = "brood_state.json"


@click.group()
@click.version_option(version=__version__)
@click.option('--state', 'state_path', envvar='BROOD_STATE', default=DEFAULT_STATE,
              show_default=True, help='State file (env BROOD_STATE)')
@click.pass_context
def cli(ctx, state_path: str):
    """Brood: replication and fleet control for self-funding agents."""
    ctx.ensure_object(dict)
    ctx.obj["state_path"] = state_path


# Replication
cli.add_command(spawn)

# Fleet
cli.add_command(children)
cli.add_command(fund)
cli.add_command(status)
cli.add_command(report)
cli.add_command(record)

# Oracles
cli.add_command(ledger)
cli.add_command(history)


if __name__ == "__main__":
    cli()
