"""Locate the ``tiq.toml`` a CLI invocation should read.

Resolution order: the ``--config`` flag, then the ``TIQ_CONFIG`` env var,
then the nearest ``tiq.toml`` in the start directory or any of its parents.
A path named explicitly by the flag or the env var must exist.
"""

from __future__ import annotations

import os
from pathlib import Path

import click

CONFIG_FILENAME = "tiq.toml"
CONFIG_ENV_VAR = "TIQ_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``tiq.toml`` at or above *start* (default: cwd)."""
    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | None = None, start: Path | None = None) -> Path | None:
    """Pick the config file for this invocation, or None to run on defaults.

    Raises:
        click.ClickException: If *explicit* or ``$TIQ_CONFIG`` names a
            file that does not exist.
    """
    named, source = explicit, "--config"
    if not named:
        named, source = os.environ.get(CONFIG_ENV_VAR), CONFIG_ENV_VAR
    if not named:
        return find_config(start)

    path = Path(named).expanduser()
    if not path.is_file():
        msg = f"Config file from {source} not found: {path}"
        raise click.ClickException(msg)
    return path
