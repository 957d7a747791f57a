"""Subcommand modules for pockettopo.

Provides register_commands() which uses deferred imports to keep
``pockettopo --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from pockettopo.commands.check import check
    from pockettopo.commands.export import export
    from pockettopo.commands.inspect import inspect_cmd

    cli.add_command(inspect_cmd)
    cli.add_command(check)
    cli.add_command(export)
