"""Click options shared by the geometry-aware commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

dataset_argument = click.argument(
    "dataset",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


def geometry_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach ``--width`` / ``--height`` (defaults come from [geometry])."""
    func = click.option("--height", type=float, default=None, help="Drawing area height.")(func)
    func = click.option("--width", type=float, default=None, help="Drawing area width.")(func)
    return func


key_digits_option = click.option(
    "--key-digits",
    type=click.IntRange(min=0),
    default=None,
    help="Round x keys to N decimals before stacking.",
)
