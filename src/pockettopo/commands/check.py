"""Command: consistency checks over a decoded .top file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pockettopo.commands._base import TOP_FILE, TopoCommand

if TYPE_CHECKING:
    from pathlib import Path

    from pockettopo.commands._context import AppContext


@click.command(
    cls=TopoCommand,
    examples=[
        ("pockettopo check cave.top", "list dangling trips and unknown stations"),
        ("pockettopo check cave.top --strict", "exit 1 on dangling trip indices"),
        ("pockettopo --json check cave.top", "issues as JSON"),
        (
            "POCKETTOPO_CHECK__STRICT_TRIP_INDEX=true pockettopo check cave.top",
            "report dangling trip indices as errors",
        ),
    ],
)
@click.argument("path", type=TOP_FILE)
@click.option(
    "--strict",
    is_flag=True,
    help="Report dangling trip indices as errors and exit 1 if any error is found.",
)
@click.pass_obj
def check(app: AppContext, path: Path, strict: bool) -> None:
    """Check PATH for dangling trip indices and unknown stations."""
    result = app.service.check(path, strict=strict)
    app.emit(result)
    if strict and not result.data.get("healthy", True):
        raise SystemExit(1)
