"""Command: summarise a .top file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pockettopo.commands._base import TOP_FILE, TopoCommand

if TYPE_CHECKING:
    from pathlib import Path

    from pockettopo.commands._context import AppContext


@click.command(
    "inspect",
    cls=TopoCommand,
    examples=[
        ("pockettopo inspect cave.top", "counts, trips and shots"),
        ("pockettopo -v inspect cave.top", "add comments, polygon colors and timings"),
        ("pockettopo --json inspect cave.top", "the same summary as JSON"),
        ("pockettopo -q inspect cave.top | sort", "one tab-separated line per shot"),
    ],
)
@click.argument("path", type=TOP_FILE)
@click.pass_obj
def inspect_cmd(app: AppContext, path: Path) -> None:
    """Show trips, shots, references and drawing summaries of PATH."""
    app.emit(app.service.inspect(path))
