"""Data Owner port for application tables provisioned at startup.

A data owner is responsible for one managed table: its name, its column
definition and the schema version it expects after creation.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, Sequence

from versioned_store.domain.value_objects import ColumnSpec
from versioned_store.ports.inbound.schema_manager import SchemaManager


class DataOwner(Protocol):
    """Protocol for self-provisioning data owners."""

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Return the name of the owned table."""
        ...

    @property
    @abstractmethod
    def columns(self) -> Sequence[ColumnSpec]:
        """Return the ordered column definition of the owned table."""
        ...

    @property
    @abstractmethod
    def version(self) -> int:
        """Return the schema version expected after creation."""
        ...

    @abstractmethod
    def provision(self, schema: SchemaManager) -> bool:
        """Ensure the owned table exists and is version-stamped.

        Returns:
            True on success, False if any step failed.
        """
        ...
