"""Table Lifecycle Manager: idempotent create and drop of managed tables.

Both operations are idempotent: creating a present table and dropping an
absent one succeed without touching the store. Neither touches the
bookkeeping table. Callers stamp new tables themselves, and a drop leaves
the version record in place as history of what was installed.
"""

from __future__ import annotations

from typing import Iterable

from versioned_store.application.executor import QueryExecutor
from versioned_store.application.table_catalog import TableCatalog
from versioned_store.domain.entities import ExecutionResult
from versioned_store.domain.services import build_create_from_definition, build_drop_statement
from versioned_store.domain.value_objects import ColumnSpec, TableDefinition
from versioned_store.infrastructure.logging import get_logger
from versioned_store.infrastructure.metrics import MetricsRegistry, get_metrics
from versioned_store.ports.inbound import CatalogQueryError

logger = get_logger(__name__)


class TableLifecycleManager:
    """Creates and drops tables through the Schema Builder and Query Executor."""

    def __init__(
        self,
        executor: QueryExecutor,
        catalog: TableCatalog,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._executor = executor
        self._catalog = catalog
        self._metrics = metrics or get_metrics()

    def ensure_table(self, name: str, columns: Iterable[ColumnSpec]) -> ExecutionResult:
        """Create a table unless it already exists.

        A present table is left untouched and its columns are not compared
        with the given definition; the definition is only validated when
        the table has to be created.

        Args:
            name: Table to create.
            columns: Ordered (name, type_clause) pairs or ColumnDefs.

        Returns:
            "OK: Table ... created", "OK: Table ... exists", or a failed
            result if the definition is invalid, the catalog cannot be
            read, or CREATE TABLE fails.
        """
        try:
            if self._catalog.table_exists(name):
                return ExecutionResult.ok(f"Table '{name}' exists")
        except CatalogQueryError as e:
            return ExecutionResult.error(str(e))

        try:
            definition = TableDefinition.of(name, columns)
        except ValueError as e:
            logger.warning("table_definition_invalid", table=name, error=str(e))
            return ExecutionResult.error(str(e))

        result = self._executor.execute(build_create_from_definition(definition))
        if not result.success:
            logger.error("table_create_failed", table=name, error=result.message)
            return result

        self._metrics.tables_created_total.inc()
        logger.info("table_created", table=name, columns=definition.column_names)
        return ExecutionResult.ok(f"Table '{name}' created")

    def drop_table(self, name: str) -> ExecutionResult:
        """Drop a table if it exists.

        Returns:
            "OK: Table ... dropped", "OK: Table ... does not exist", or a
            failed result.
        """
        try:
            if not self._catalog.table_exists(name):
                return ExecutionResult.ok(f"Table '{name}' does not exist")
            statement = build_drop_statement(name)
        except (CatalogQueryError, ValueError) as e:
            return ExecutionResult.error(str(e))

        result = self._executor.execute(statement)
        if not result.success:
            logger.error("table_drop_failed", table=name, error=result.message)
            return result

        self._metrics.tables_dropped_total.inc()
        logger.info("table_dropped", table=name)
        return ExecutionResult.ok(f"Table '{name}' dropped")
