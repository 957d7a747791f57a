"""Command: export a decoded .top file as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from pockettopo.commands._base import TOP_FILE, TopoCommand

if TYPE_CHECKING:
    from pockettopo.commands._context import AppContext


@click.command(
    cls=TopoCommand,
    examples=[
        ("pockettopo export cave.top > cave.json", "bare document on stdout"),
        ("pockettopo export cave.top --output build/cave.json", "write the file, print a summary"),
        (
            "POCKETTOPO_EXPORT__ELEMENT_ORDER=render pockettopo export cave.top",
            "drawing elements newest-first",
        ),
    ],
)
@click.argument("path", type=TOP_FILE)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write JSON to this file instead of stdout.",
)
@click.pass_obj
def export(app: AppContext, path: Path, output: Path | None) -> None:
    """Export the full decoded document of PATH as JSON."""
    result = app.service.export_json(path, output=output)

    # Bare document on stdout so the output can be piped straight to other tools.
    if result.ok and output is None and not app.settings.json_output:
        indent = app.settings.export.indent or None
        click.echo(json.dumps(result.data["document"], indent=indent, ensure_ascii=False))
        return
    app.emit(result)
