"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for external systems that the
versioned store depends on, such as the database connection.
"""

from versioned_store.ports.outbound.store_handle import StoreClosedError, StoreHandle

__all__ = [
    "StoreHandle",
    "StoreClosedError",
]
