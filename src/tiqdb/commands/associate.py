"""Command: associate tokens with tags."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tiqdb.commands._base import TiqCommand, namespace_option
from tiqdb.services.associate import AssociateService

if TYPE_CHECKING:
    from tiqdb.commands._context import AppContext


@click.command(
    cls=TiqCommand,
    examples="""\
  tiq associate https://example.com -t python -t asyncio
  tiq associate john -t hello -t yes --namespace private
  tiq --json associate "some token" -t tag""",
)
@click.argument("tokens", nargs=-1, required=True)
@click.option("-t", "--tag", "tags", multiple=True, required=True, help="Tag (repeatable).")
@namespace_option
@click.pass_obj
def associate(
    app: AppContext,
    tokens: tuple[str, ...],
    tags: tuple[str, ...],
    namespace: str | None,
) -> None:
    """Associate every TOKEN with every --tag."""
    result = app.run(lambda store: AssociateService(store).associate(tokens, tags, namespace))
    app.emit(result)
