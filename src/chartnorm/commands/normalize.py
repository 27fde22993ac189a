"""Command: normalize a dataset into screen coordinates."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from chartnorm.commands._base import ChartCommand
from chartnorm.commands._options import dataset_argument, geometry_options, key_digits_option
from chartnorm.domain.types import ChartKind

if TYPE_CHECKING:
    from chartnorm.commands._context import AppContext


@click.command(
    cls=ChartCommand,
    examples="""\
  chartnorm normalize data.json
  chartnorm normalize data.csv --kind bar --width 640 --height 480
  chartnorm normalize data.json --kind stacked_bar --key-digits 2
  chartnorm --json normalize data.json --kind point""",
)
@dataset_argument
@click.option(
    "--kind",
    type=click.Choice([k.value for k in ChartKind]),
    default=ChartKind.LINE.value,
    show_default=True,
    help="Chart kind.",
)
@geometry_options
@key_digits_option
@click.pass_obj
def normalize(
    app: AppContext,
    dataset: Path,
    kind: str,
    width: float | None,
    height: float | None,
    key_digits: int | None,
) -> None:
    """Map DATASET onto a drawing area for the given chart kind."""
    points = app.load(dataset, "normalize")
    geometry = app.geometry(width, height)
    app.emit(app.service.normalize(points, kind, geometry, key_digits=key_digits))
