"""Schema Manager port: the surface data owners provision through.

This inbound port defines the complete public surface of the store:
existence checks, create/drop, and version get/set. Every operation
reports an outcome instead of raising, except where a query error must
not be mistaken for an answer.

Version protocol:
    get_version returns the recorded version (>= 0) of a stamped table,
    NOT_TRACKED (0) for a table that was never provisioned, and
    VERSION_UNKNOWN (-1) when the bookkeeping state cannot be trusted.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Iterable, Protocol, Sequence

from versioned_store.domain.entities import ExecutionResult
from versioned_store.domain.value_objects import ColumnSpec


class SchemaManager(Protocol):
    """Protocol for schema provisioning operations.

    Example:
        if not schema.table_exists("UserData"):
            if schema.ensure_table("UserData", columns):
                schema.set_version("UserData", 1)
    """

    @abstractmethod
    def table_exists(self, name: str) -> bool:
        """Check the live catalog for a table.

        Raises:
            CatalogQueryError: If the catalog cannot be queried.
        """
        ...

    @abstractmethod
    def ensure_table(self, name: str, columns: Iterable[ColumnSpec]) -> ExecutionResult:
        """Create a table unless it already exists.

        The new table is not version-stamped; callers follow up with
        set_version using their own numbering scheme.
        """
        ...

    @abstractmethod
    def drop_table(self, name: str) -> ExecutionResult:
        """Drop a table if it exists.

        The bookkeeping record of the table is kept.
        """
        ...

    @abstractmethod
    def get_version(self, name: str) -> int:
        """Return the installed version, NOT_TRACKED or VERSION_UNKNOWN."""
        ...

    @abstractmethod
    def set_version(self, name: str, version: int) -> ExecutionResult:
        """Record the installed version of an existing table (upsert)."""
        ...


class SchemaError(Exception):
    """Base exception for errors raised by the versioned store."""

    pass


class StoreOpenError(SchemaError):
    """The store could not be opened. Fatal for bootstrap."""

    pass


class StatementFailure(SchemaError):
    """A single SQL operation failed to prepare or execute."""

    pass


class CatalogQueryError(StatementFailure):
    """The table catalog could not be queried.

    Distinct from a negative answer: "the query failed" is never reported
    as "the table does not exist".
    """

    pass


class VersionStateUnknown(SchemaError):
    """The bookkeeping table is missing or holds a malformed record."""

    pass


class PartialProvisioningFailure(SchemaError):
    """One or more data owners failed to provision their table.

    Attributes:
        failed_tables: Every table whose owner failed, in provisioning order.
    """

    def __init__(self, failed_tables: Sequence[str]) -> None:
        self.failed_tables = list(failed_tables)
        super().__init__(
            "Failed to provision table(s): " + ", ".join(self.failed_tables)
        )
