"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Runs service coroutines against a TagStore that lives
exactly as long as one event loop, and emits results with the right exit
semantics.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import click

from tiqdb.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from tiqdb.config.settings import TiqSettings
    from tiqdb.infrastructure.store import TagStore
    from tiqdb.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is only opened inside :meth:`run`, so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: TiqSettings) -> None:
        self.settings = settings

        from tiqdb.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            sql_echo=settings.database.echo,
        )

        from tiqdb.services.telemetry import set_telemetry

        set_telemetry(settings.verbose)

    def run(self, action: Callable[[TagStore], Awaitable[ServiceResult]]) -> ServiceResult:
        """Open a store, await *action* with it, and drain the store."""
        from tiqdb.infrastructure.store import TagStore

        async def _main() -> ServiceResult:
            store = TagStore.from_settings(self.settings)
            try:
                return await action(store)
            finally:
                await store.close()

        return asyncio.run(_main())

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult.

        * Success: writes to stdout; warnings go to stderr outside JSON mode.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
