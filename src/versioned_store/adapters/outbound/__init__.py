"""Outbound adapters - implementations of outbound ports.

These adapters implement external dependencies, currently the
SQLite connection behind the StoreHandle port.
"""

from versioned_store.adapters.outbound.sqlite_store import MEMORY_LOCATION, SQLiteStore

__all__ = [
    "MEMORY_LOCATION",
    "SQLiteStore",
]
