"""Value objects for the versioned store domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Identifiers:
        - TableName: Type-safe table name
        - SchemaVersion: Type-safe schema version
        - NOT_TRACKED, VERSION_UNKNOWN: Version registry sentinels
        - BOOKKEEPING_TABLE: Name of the reserved bookkeeping table

    Table Definitions:
        - ColumnDef: One (name, type clause) column
        - TableDefinition: Ordered, validated column list for a table
"""

from versioned_store.domain.value_objects.identifiers import (
    BOOKKEEPING_NAME_COLUMN,
    BOOKKEEPING_TABLE,
    BOOKKEEPING_VERSION_COLUMN,
    MAX_VERSION,
    NOT_TRACKED,
    VERSION_UNKNOWN,
    SchemaVersion,
    TableName,
    is_valid_version,
)
from versioned_store.domain.value_objects.table_definition import (
    ColumnDef,
    ColumnSpec,
    TableDefinition,
)

__all__ = [
    # Identifiers
    "TableName",
    "SchemaVersion",
    "NOT_TRACKED",
    "VERSION_UNKNOWN",
    "MAX_VERSION",
    "BOOKKEEPING_TABLE",
    "BOOKKEEPING_NAME_COLUMN",
    "BOOKKEEPING_VERSION_COLUMN",
    "is_valid_version",
    # Table definitions
    "ColumnDef",
    "ColumnSpec",
    "TableDefinition",
]
