"""Application layer for the versioned store.

The application layer runs the schema use cases against a borrowed
store handle.

Exports:
    Executor:
        - QueryExecutor: Runs single statements, reporting failures as results
    Schema:
        - TableCatalog: Live table existence checks
        - VersionRegistry: Version records in the bookkeeping table
        - TableLifecycleManager: Idempotent create/drop
        - SQLiteSchemaManager: Public surface for data owners
    Provisioning:
        - ManagedTable, UserMeasurementTable: Self-provisioning data owners
        - BootstrapSequencer, BootstrapReport, open_store: Startup sequence
"""

from versioned_store.application.bootstrap import (
    BootstrapReport,
    BootstrapSequencer,
    BootstrapState,
    FailureKind,
    StoreSession,
    open_store,
)
from versioned_store.application.data_owners import (
    USER_MEASUREMENT_COLUMNS,
    USER_MEASUREMENTS_TABLE,
    ManagedTable,
    UserMeasurementTable,
)
from versioned_store.application.executor import QueryExecutor
from versioned_store.application.schema_manager import SQLiteSchemaManager
from versioned_store.application.table_catalog import TableCatalog
from versioned_store.application.table_lifecycle import TableLifecycleManager
from versioned_store.application.version_registry import BOOKKEEPING_COLUMNS, VersionRegistry

__all__ = [
    "QueryExecutor",
    "TableCatalog",
    "VersionRegistry",
    "BOOKKEEPING_COLUMNS",
    "TableLifecycleManager",
    "SQLiteSchemaManager",
    "ManagedTable",
    "UserMeasurementTable",
    "USER_MEASUREMENTS_TABLE",
    "USER_MEASUREMENT_COLUMNS",
    "BootstrapSequencer",
    "BootstrapReport",
    "BootstrapState",
    "FailureKind",
    "StoreSession",
    "open_store",
]
