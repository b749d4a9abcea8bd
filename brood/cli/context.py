"""Wire a Brood over the CLI's state file."""
import click

from brood.tools import Brood


def get_brood(ctx: click.Context) -> Brood:
    """Open the Brood for this invocation's --state path."""
    obj = ctx.ensure_object(dict)
    if "brood" not in obj:
        obj["brood"] = Brood.from_env(obj.get("state_path"))
    return obj["brood"]
