"""Shared output formatting with ASCII boxes. NO class - just functions."""

import json

import click

BOX_WIDTH = 60


def print_json(data: dict) -> None:
    """Print JSON data formatted."""
    click.echo(json.dumps(data, indent=2, sort_keys=True))


def _truncate(text: str, max_len: int = 50) -> str:
    """Truncate text with ellipsis if too long."""
    return text[:max_len-3] + "..." if len(text) > max_len else text


def _top(title: str) -> str:
    return f"╭─ {title} " + "─" * max(0, BOX_WIDTH - len(title) - 4) + "╮"


def _bottom() -> str:
    return "╰" + "─" * (BOX_WIDTH - 1) + "╯"


def _row(text: str) -> str:
    line = f"│ {_truncate(text, BOX_WIDTH - 4)}"
    return line + " " * max(0, BOX_WIDTH - len(line)) + "│"


def success_box(title: str, rows: list[tuple[str, str]], next_cmd: str | None = None) -> None:
    """Print bordered box of label/value rows with optional Next: suggestion."""
    click.echo(_top(title))
    for label, value in rows:
        click.echo(_row(f"{label}: {value}"))
    click.echo(_bottom())
    if next_cmd:
        click.echo(f"Next: {next_cmd}")


def text_box(title: str, text: str, next_cmd: str | None = None) -> None:
    """Print multi-line tool output inside a bordered box."""
    click.echo(_top(title))
    for line in text.splitlines() or [""]:
        click.echo(_row(line))
    click.echo(_bottom())
    if next_cmd:
        click.echo(f"Next: {next_cmd}")


def error_box(title: str, message: str, fix_cmd: str | None = None) -> None:
    """Print red-bordered error box with optional fix suggestion."""
    click.echo(click.style(_top(title), fg="red"))
    click.echo(_row(message))
    click.echo(click.style(_bottom(), fg="red"))
    if fix_cmd:
        click.echo(f"Fix: {fix_cmd}")


def table(headers: list[str], rows: list[list[str]]) -> None:
    """Print simple table for list commands."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(str(cell)))

    header_line = "│ " + " │ ".join(h.ljust(widths[i]) for i, h in enumerate(headers)) + " │"
    sep_line = "├" + "─" + "─┼─".join("─" * w for w in widths) + "─┤"

    click.echo("╭" + "─" * (len(header_line) - 2) + "╮")
    click.echo(header_line)
    click.echo(sep_line)
    for row in rows:
        cells = [str(row[i]).ljust(widths[i]) if i < len(row) else " " * widths[i]
                 for i in range(len(headers))]
        click.echo("│ " + " │ ".join(cells) + " │")
    click.echo("╰" + "─" * (len(header_line) - 2) + "╯")
