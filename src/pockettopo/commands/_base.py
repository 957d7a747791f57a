"""Click pieces shared by the pockettopo subcommands."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import click

# A .top file on disk. Decoding problems are reported by the service, not Click.
TOP_FILE = click.Path(exists=True, dir_okay=False, readable=True, path_type=Path)

# (command line, what it shows)
Example = tuple[str, str]


class TopoCommand(click.Command):
    """Command with worked examples behind an eager ``--examples`` flag.

    Examples are kept out of ``--help`` so it stays short. They are printed
    as a definition list: command line first, then what it is for.
    """

    def __init__(self, *args: Any, examples: Sequence[Example] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        formatter = ctx.make_formatter()
        with formatter.section(f"Examples for '{ctx.command_path}'"):
            formatter.write_dl(self.examples, col_max=60)
        click.echo(formatter.getvalue(), nl=False)
        ctx.exit(0)
