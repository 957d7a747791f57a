"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and telemetry, and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pockettopo.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pockettopo.config.settings import PocketTopoSettings
    from pockettopo.services.result import ServiceResult
    from pockettopo.services.survey import SurveyService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PocketTopoSettings) -> None:
        self.settings = settings

        from pockettopo.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from pockettopo.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> SurveyService:
        """A survey service bound to the current settings."""
        from pockettopo.services.survey import SurveyService

        return SurveyService(self.settings)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, settings=self.output_settings)
        if result.ok:
            if output:
                click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
