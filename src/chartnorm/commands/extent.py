"""Command: report dataset extents."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from chartnorm.commands._base import ChartCommand
from chartnorm.commands._options import dataset_argument

if TYPE_CHECKING:
    from chartnorm.commands._context import AppContext


@click.command(
    cls=ChartCommand,
    examples="""\
  chartnorm extent data.json
  chartnorm -q extent data.csv""",
)
@dataset_argument
@click.pass_obj
def extent(app: AppContext, dataset: Path) -> None:
    """Print the x and y extents of DATASET."""
    app.emit(app.service.extent(app.load(dataset, "extent")))
