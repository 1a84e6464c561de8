"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (SchemaManager, DataOwner)
- Outbound ports: Dependencies on external systems (StoreHandle)

Adapters implement these ports with concrete functionality.
"""

from versioned_store.ports.inbound import (
    CatalogQueryError,
    DataOwner,
    PartialProvisioningFailure,
    SchemaError,
    SchemaManager,
    StatementFailure,
    StoreOpenError,
    VersionStateUnknown,
)
from versioned_store.ports.outbound import StoreClosedError, StoreHandle

__all__ = [
    # Inbound ports
    "DataOwner",
    "SchemaManager",
    "SchemaError",
    "StoreOpenError",
    "StatementFailure",
    "CatalogQueryError",
    "VersionStateUnknown",
    "PartialProvisioningFailure",
    # Outbound ports
    "StoreHandle",
    "StoreClosedError",
]
