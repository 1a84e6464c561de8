"""Domain entities for the versioned store.

Exports:
    - Row: A row returned by a query
    - ExecutionResult: Success/failure outcome of a statement or operation
    - VersionRecord: One row of the bookkeeping table
    - VersionLookup: Result of looking up a table's installed version
    - VersionStatus: Tracked / not tracked / unknown states of a lookup
    - MalformedRecordError: Raised when a bookkeeping row cannot be parsed
"""

from versioned_store.domain.entities.execution_result import ExecutionResult, Row
from versioned_store.domain.entities.version_record import (
    MalformedRecordError,
    VersionLookup,
    VersionRecord,
    VersionStatus,
)

__all__ = [
    "ExecutionResult",
    "Row",
    "MalformedRecordError",
    "VersionLookup",
    "VersionRecord",
    "VersionStatus",
]
