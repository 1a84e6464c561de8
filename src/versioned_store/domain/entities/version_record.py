"""Bookkeeping records and version lookups.

A VersionRecord is one row of the TablesVersions table. A VersionLookup is
the answer to "which version of this table is installed?", which may be a
record or one of several distinguishable failure states.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from versioned_store.domain.value_objects import (
    NOT_TRACKED,
    VERSION_UNKNOWN,
    SchemaVersion,
    TableName,
    is_valid_version,
)


class MalformedRecordError(ValueError):
    """A bookkeeping row could not be parsed as a version record."""


@dataclass(frozen=True, slots=True)
class VersionRecord:
    """One row of the bookkeeping table.

    Attributes:
        table_name: The managed table the record describes.
        version: Installed schema version (non-negative).
    """

    table_name: TableName
    version: SchemaVersion

    def __post_init__(self) -> None:
        if not is_valid_version(self.version):
            raise MalformedRecordError(
                f"Version of '{self.table_name}' must be a non-negative integer, "
                f"got {self.version!r}"
            )

    @classmethod
    def from_row(cls, table_name: Any, version: Any) -> VersionRecord:
        """Parse a raw bookkeeping row.

        SQLite's INTEGER affinity converts numeric text on insert, but rows
        written by other tools may still hold text or reals. Integral reals
        and digit strings are accepted; everything else is malformed.

        Raises:
            MalformedRecordError: If the row cannot be parsed.
        """
        if not isinstance(table_name, str) or not table_name:
            raise MalformedRecordError(f"Invalid table name in record: {table_name!r}")

        parsed: Any = version
        if isinstance(version, float) and version.is_integer():
            parsed = int(version)
        elif isinstance(version, str) and version.strip().isdigit():
            parsed = int(version.strip())

        return cls(TableName(table_name), SchemaVersion(parsed))


class VersionStatus(Enum):
    """Outcome of a version lookup."""

    TRACKED = "tracked"
    NOT_TRACKED = "not_tracked"
    UNSTAMPED = "unstamped"
    NO_BOOKKEEPING = "no_bookkeeping"
    MALFORMED = "malformed"
    QUERY_FAILED = "query_failed"


@dataclass(frozen=True, slots=True)
class VersionLookup:
    """Detailed answer of the version registry for one table."""

    table_name: TableName
    status: VersionStatus
    version: SchemaVersion | None = None

    @property
    def value(self) -> SchemaVersion:
        """Collapse the lookup to the integer protocol.

        TRACKED gives the recorded version, NOT_TRACKED gives 0 and every
        other status gives -1.
        """
        if self.status is VersionStatus.TRACKED and self.version is not None:
            return self.version
        if self.status is VersionStatus.NOT_TRACKED:
            return NOT_TRACKED
        return VERSION_UNKNOWN

    @property
    def is_known(self) -> bool:
        return self.status in (VersionStatus.TRACKED, VersionStatus.NOT_TRACKED)
