"""Repositories encapsulating SQL for the tags and associations tables."""

from tiqdb.infrastructure.repositories.associations import AssociationStore
from tiqdb.infrastructure.repositories.labels import LabelStore

__all__ = ["AssociationStore", "LabelStore"]
