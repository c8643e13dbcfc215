"""Exceptions raised by the store layer.

Constraint violations never surface as exceptions: the repositories recover
from them locally. Driver failures propagate as ``SQLAlchemyError`` and are
translated into ``ServiceResult`` errors at the service boundary.
"""

from __future__ import annotations


class TiqError(Exception):
    """Base class for tiqdb errors."""


class StoreClosedError(TiqError):
    """Raised when an operation starts after ``TagStore.close()`` began."""


class SchemaError(TiqError):
    """Raised when the schema could not be created."""
