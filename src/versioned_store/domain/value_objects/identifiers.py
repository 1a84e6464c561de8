"""Core identifiers and sentinel values for the versioned store.

Table names and schema versions travel through every layer; the NewType
aliases keep them from being confused with arbitrary strings and integers.
"""

from __future__ import annotations

from typing import NewType


TableName = NewType("TableName", str)
"""Name of a table in the store. SQLite compares these case-insensitively."""

SchemaVersion = NewType("SchemaVersion", int)
"""Installed schema version of a managed table. Always non-negative when recorded."""

# Sentinel values returned by the version registry
NOT_TRACKED = SchemaVersion(0)
"""No bookkeeping record and no table: the table was never provisioned."""

VERSION_UNKNOWN = SchemaVersion(-1)
"""Bookkeeping missing, record malformed, or table present without a record."""

# Reserved bookkeeping table, fixed for on-disk compatibility
BOOKKEEPING_TABLE = TableName("TablesVersions")
BOOKKEEPING_NAME_COLUMN = "tableName"
BOOKKEEPING_VERSION_COLUMN = "version"

# Largest value an SQLite INTEGER can hold
MAX_VERSION = SchemaVersion(2**63 - 1)


def is_valid_version(value: object) -> bool:
    """Check that a value can be stored as a schema version.

    bool is rejected even though it subclasses int.
    """
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_VERSION
