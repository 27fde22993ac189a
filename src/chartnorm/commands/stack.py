"""Command: stack points by x-key."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from chartnorm.commands._base import ChartCommand
from chartnorm.commands._options import dataset_argument, geometry_options, key_digits_option

if TYPE_CHECKING:
    from chartnorm.commands._context import AppContext


@click.command(
    cls=ChartCommand,
    examples="""\
  chartnorm stack sales.csv
  chartnorm stack readings.json --key-digits 1
  chartnorm -q stack sales.csv""",
)
@dataset_argument
@geometry_options
@key_digits_option
@click.pass_obj
def stack(
    app: AppContext,
    dataset: Path,
    width: float | None,
    height: float | None,
    key_digits: int | None,
) -> None:
    """Group DATASET by x, sum y per group, and lay out stacked columns."""
    points = app.load(dataset, "stack")
    app.emit(app.service.stack(points, app.geometry(width, height), key_digits=key_digits))
