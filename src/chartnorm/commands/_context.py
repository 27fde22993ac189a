"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Owns logging setup, the service instance, dataset
loading, and result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from chartnorm.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from chartnorm.config.settings import ChartnormSettings
    from chartnorm.domain.models import DataPoint, Geometry
    from chartnorm.services.normalize import NormalizationService
    from chartnorm.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ChartnormSettings) -> None:
        self.settings = settings
        self._service: NormalizationService | None = None

        from chartnorm.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from chartnorm.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> NormalizationService:
        """The normalization service (created on first use)."""
        if self._service is None:
            from chartnorm.services.normalize import NormalizationService

            self._service = NormalizationService(self.settings)
        return self._service

    def geometry(self, width: float | None, height: float | None) -> Geometry:
        """Drawing area from CLI options, falling back to [geometry] config."""
        from chartnorm.domain.errors import InvalidValueError
        from chartnorm.domain.models import Geometry

        defaults = self.settings.geometry
        try:
            return Geometry(
                width if width is not None else defaults.width,
                height if height is not None else defaults.height,
            )
        except InvalidValueError as exc:
            raise click.BadParameter(str(exc)) from exc

    def load(self, path: Path, op: str) -> list[DataPoint]:
        """Read a dataset file, emitting an error result on failure."""
        from chartnorm.infrastructure.datasets import DatasetFormatError, load_dataset
        from chartnorm.services.result import ServiceResult

        try:
            return load_dataset(path)
        except DatasetFormatError as exc:
            self.emit(ServiceResult.failure(op, "DATASET_FORMAT", str(exc), {"path": str(path)}))
            raise  # emit() exits; kept for type checkers

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr unless in JSON mode.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if settings.quiet and not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
