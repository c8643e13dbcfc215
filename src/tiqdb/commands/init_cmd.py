"""Command: create the store schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tiqdb.commands._base import TiqCommand
from tiqdb.services.init import InitService

if TYPE_CHECKING:
    from tiqdb.commands._context import AppContext


@click.command(
    "init",
    cls=TiqCommand,
    examples="""\
  tiq init
  tiq --db ./tags.db init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the tags tables if they do not exist."""
    app.emit(app.run(lambda store: InitService(store).init_store()))
