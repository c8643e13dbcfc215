"""Command: tags shared by all given tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tiqdb.commands._base import TiqCommand, namespace_option
from tiqdb.services.describe import DescribeService

if TYPE_CHECKING:
    from tiqdb.commands._context import AppContext


@click.command(
    cls=TiqCommand,
    examples="""\
  tiq describe https://example.com
  tiq describe python asyncio
  tiq -q describe john --namespace private""",
)
@click.argument("tokens", nargs=-1, required=True)
@namespace_option
@click.pass_obj
def describe(app: AppContext, tokens: tuple[str, ...], namespace: str | None) -> None:
    """List labels associated with all TOKENS."""
    app.emit(app.run(lambda store: DescribeService(store).describe(tokens, namespace)))
