"""Command: substring search over labels."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tiqdb.commands._base import TiqCommand, namespace_option
from tiqdb.services.search import SearchService

if TYPE_CHECKING:
    from tiqdb.commands._context import AppContext


@click.command(
    cls=TiqCommand,
    examples="""\
  tiq search duck
  tiq search CAT --namespace private
  tiq --json search http --limit 5""",
)
@click.argument("text")
@namespace_option
@click.option("--limit", default=None, type=int, help="Max results.")
@click.pass_obj
def search(app: AppContext, text: str, namespace: str | None, limit: int | None) -> None:
    """Labels containing TEXT (case-insensitive)."""
    app.emit(app.run(lambda store: SearchService(store).search(text, namespace, limit=limit)))
