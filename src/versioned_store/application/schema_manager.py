"""Schema Manager: the public surface handed to data owners.

This module wires the Query Executor, Table Presence Oracle, Version
Registry and Table Lifecycle Manager around one borrowed store handle.

Usage:
    from versioned_store.adapters import SQLiteStore
    from versioned_store.application import SQLiteSchemaManager

    with SQLiteStore("/path/to/store.db") as store:
        schema = SQLiteSchemaManager(store)
        schema.ensure_table("TablesVersions", BOOKKEEPING_COLUMNS)
        if schema.ensure_table("UserData", [("id", "TEXT PRIMARY KEY")]):
            schema.set_version("UserData", 1)
"""

from __future__ import annotations

from typing import Iterable

from versioned_store.application.executor import QueryExecutor
from versioned_store.application.table_catalog import TableCatalog
from versioned_store.application.table_lifecycle import TableLifecycleManager
from versioned_store.application.version_registry import BOOKKEEPING_COLUMNS, VersionRegistry
from versioned_store.domain.entities import ExecutionResult, VersionLookup, VersionRecord
from versioned_store.domain.value_objects import BOOKKEEPING_TABLE, ColumnSpec
from versioned_store.infrastructure.metrics import MetricsRegistry, get_metrics
from versioned_store.ports.outbound import StoreHandle


class SQLiteSchemaManager:
    """SQLite implementation of the SchemaManager protocol.

    The manager borrows the store handle; it never opens or closes it.
    """

    def __init__(self, store: StoreHandle, metrics: MetricsRegistry | None = None) -> None:
        metrics = metrics or get_metrics()
        self._store = store
        self._executor = QueryExecutor(store, metrics)
        self._catalog = TableCatalog(self._executor)
        self._registry = VersionRegistry(self._executor, self._catalog, metrics)
        self._lifecycle = TableLifecycleManager(self._executor, self._catalog, metrics)

    @property
    def store(self) -> StoreHandle:
        return self._store

    @property
    def executor(self) -> QueryExecutor:
        return self._executor

    @property
    def registry(self) -> VersionRegistry:
        return self._registry

    # Public surface

    def table_exists(self, name: str) -> bool:
        return self._catalog.table_exists(name)

    def ensure_table(self, name: str, columns: Iterable[ColumnSpec]) -> ExecutionResult:
        return self._lifecycle.ensure_table(name, columns)

    def drop_table(self, name: str) -> ExecutionResult:
        return self._lifecycle.drop_table(name)

    def get_version(self, name: str) -> int:
        return self._registry.get_version(name)

    def set_version(self, name: str, version: int) -> ExecutionResult:
        return self._registry.set_version(name, version)

    # Administrative helpers

    def ensure_bookkeeping(self) -> ExecutionResult:
        """Create the bookkeeping table if it is absent."""
        return self._lifecycle.ensure_table(BOOKKEEPING_TABLE, BOOKKEEPING_COLUMNS)

    def lookup_version(self, name: str) -> VersionLookup:
        return self._registry.lookup(name)

    def clear_version(self, name: str) -> ExecutionResult:
        return self._registry.clear_version(name)

    def version_records(self) -> list[VersionRecord]:
        return self._registry.records()

    def list_tables(self) -> list[str]:
        return self._catalog.list_tables()
