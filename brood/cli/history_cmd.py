"""History commands: skill, turn."""
import sys

import click

from .context import get_brood
from .output import error_box, success_box


@click.group()
def history():
    """Parent skills and tool-call history."""
    pass


@history.command()
@click.argument('name')
@click.option('--disabled', is_flag=True, help='Record the skill as disabled')
@click.pass_context
def skill(ctx, name: str, disabled: bool):
    """Install or toggle a parent skill."""
    try:
        skills = get_brood(ctx).skills
        skills.set_skill(name, enabled=not disabled)
        success_box("Skill Recorded", [
            ("Skill", name),
            ("Enabled", str(not disabled)),
            ("Enabled Skills", str(len(skills.list_enabled_skill_names()))),
        ])
        sys.exit(0)

    except Exception as e:
        error_box("Skill: ERROR", str(e))
        sys.exit(2)


@history.command()
@click.argument('tools', nargs=-1, required=True)
@click.option('--failed', multiple=True, help='Tool call that errored (repeatable)')
@click.pass_context
def turn(ctx, tools: tuple[str, ...], failed: tuple[str, ...]):
    """Record one agent turn made of TOOLS calls."""
    try:
        calls = [{"name": t, "error": None} for t in tools]
        calls += [{"name": t, "error": "failed"} for t in failed]
        recorded = get_brood(ctx).skills.record_turn(calls)
        success_box("Turn Recorded", [
            ("Turn", recorded["id"]),
            ("Calls", str(len(calls))),
            ("Failed", str(len(failed))),
        ])
        sys.exit(0)

    except Exception as e:
        error_box("Turn: ERROR", str(e))
        sys.exit(2)
