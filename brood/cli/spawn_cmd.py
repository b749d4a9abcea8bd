"""Spawn command: evaluate replication and (when enabled) register a child."""
import sys
import time

import click

from brood.core.receipt import StopRule

from .context import get_brood
from .output import error_box, text_box


@click.command()
@click.option('--balance', 'balance_cents', type=int, required=True,
              help='Parent balance in cents')
@click.option('--name', default=None, help='Override the suggested child name')
@click.option('--specialization', default=None, help='Override the specialization')
@click.option('--message', default=None, help='Creator message for the child')
@click.option('--force', is_flag=True, help='Skip the strategy engine (FEATURE_FORCE_SPAWN_ALLOWED)')
@click.pass_context
def spawn(ctx, balance_cents: int, name: str | None, specialization: str | None,
          message: str | None, force: bool):
    """Evaluate replication and spawn a specialized child."""
    t0 = time.perf_counter()
    try:
        from brood.tools import spawn_child

        brood = get_brood(ctx)
        text = spawn_child(brood, balance_cents, name=name, specialization=specialization,
                           message=message, force=force)
        elapsed_ms = int((time.perf_counter() - t0) * 1000)

        spawned = text.startswith("Child spawned")
        title = "Spawn: OK" if spawned else "Spawn: NOT SPAWNED"
        text_box(title, f"{text}\nDuration: {elapsed_ms}ms", "brood children")
        sys.exit(0)

    except StopRule as e:
        error_box("Spawn: REFUSED", str(e))
        sys.exit(1)
    except Exception as e:
        error_box("Spawn: ERROR", str(e))
        sys.exit(2)
