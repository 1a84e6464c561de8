"""Table Presence Oracle backed by the live SQLite catalog."""

from __future__ import annotations

from versioned_store.application.executor import QueryExecutor
from versioned_store.infrastructure.logging import get_logger
from versioned_store.ports.inbound import CatalogQueryError

logger = get_logger(__name__)

# SQLite compares unquoted and quoted identifiers case-insensitively
_TABLE_NAME_SQL = (
    "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ? COLLATE NOCASE"
)
_LIST_TABLES_SQL = (
    "SELECT name FROM sqlite_master WHERE type = 'table' "
    "AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\' ORDER BY name"
)


class TableCatalog:
    """Answers whether tables exist, reading the catalog on every call."""

    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    def table_exists(self, name: str) -> bool:
        """Check whether a table currently exists.

        Raises:
            CatalogQueryError: If the catalog query fails.
        """
        return self.canonical_name(name) is not None

    def canonical_name(self, name: str) -> str | None:
        """Return the table name as spelled in the catalog, or None if absent.

        Raises:
            CatalogQueryError: If the catalog query fails.
        """
        result = self._executor.query(_TABLE_NAME_SQL, (name,))
        if not result.success:
            logger.error("catalog_query_failed", table=name, error=result.message)
            raise CatalogQueryError(f"Cannot check existence of table '{name}': {result.message}")
        return result.rows[0][0] if result.rows else None

    def list_tables(self) -> list[str]:
        """Return the names of all user tables, sorted.

        Raises:
            CatalogQueryError: If the catalog query fails.
        """
        result = self._executor.query(_LIST_TABLES_SQL)
        if not result.success:
            raise CatalogQueryError(f"Cannot list tables: {result.message}")
        return [row[0] for row in result.rows]
