"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Outbound adapters: Implement external dependencies (SQLite store)
"""

from versioned_store.adapters.outbound import MEMORY_LOCATION, SQLiteStore

__all__ = [
    # Outbound adapters
    "MEMORY_LOCATION",
    "SQLiteStore",
]
