"""Subcommand modules for tiq.

Provides register_commands() which uses deferred imports to keep
``tiq --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from tiqdb.commands.associate import associate
    from tiqdb.commands.describe import describe
    from tiqdb.commands.init_cmd import init_cmd
    from tiqdb.commands.search import search

    cli.add_command(associate)
    cli.add_command(describe)
    cli.add_command(search)
    cli.add_command(init_cmd)
