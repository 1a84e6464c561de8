"""Inbound ports - API contracts for the versioned store.

Inbound ports define the interfaces that data owners and the
surrounding application use to provision managed tables.
"""

from versioned_store.ports.inbound.data_owner import DataOwner
from versioned_store.ports.inbound.schema_manager import (
    CatalogQueryError,
    PartialProvisioningFailure,
    SchemaError,
    SchemaManager,
    StatementFailure,
    StoreOpenError,
    VersionStateUnknown,
)

__all__ = [
    "DataOwner",
    "SchemaManager",
    "SchemaError",
    "StoreOpenError",
    "StatementFailure",
    "CatalogQueryError",
    "VersionStateUnknown",
    "PartialProvisioningFailure",
]
