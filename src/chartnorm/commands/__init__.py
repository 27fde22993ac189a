"""Subcommand modules for chartnorm.

register_commands() imports lazily so ``chartnorm --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from chartnorm.commands.extent import extent
    from chartnorm.commands.normalize import normalize
    from chartnorm.commands.stack import stack

    cli.add_command(normalize)
    cli.add_command(extent)
    cli.add_command(stack)
