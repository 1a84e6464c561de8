"""Version Registry: installed schema versions in the bookkeeping table.

The bookkeeping table TablesVersions holds one record per managed table:

    TablesVersions(tableName TEXT PRIMARY KEY, version INTEGER)

Lookup outcomes:
    - TRACKED: a well-formed record exists (returned even after the table
      was dropped, since drops keep the record).
    - NOT_TRACKED (0): no record and no table; never provisioned.
    - UNSTAMPED (-1): the table exists without a record, e.g. created by a
      version-unaware caller or a crash between create and stamp.
    - NO_BOOKKEEPING / MALFORMED / QUERY_FAILED (-1): the bookkeeping state
      cannot be trusted.
"""

from __future__ import annotations

from versioned_store.application.executor import QueryExecutor
from versioned_store.application.table_catalog import TableCatalog
from versioned_store.domain.entities import (
    ExecutionResult,
    MalformedRecordError,
    VersionLookup,
    VersionRecord,
    VersionStatus,
)
from versioned_store.domain.services import quote_identifier
from versioned_store.domain.value_objects import (
    BOOKKEEPING_NAME_COLUMN,
    BOOKKEEPING_TABLE,
    BOOKKEEPING_VERSION_COLUMN,
    MAX_VERSION,
    SchemaVersion,
    TableName,
    is_valid_version,
)
from versioned_store.infrastructure.logging import get_logger
from versioned_store.infrastructure.metrics import MetricsRegistry, get_metrics
from versioned_store.ports.inbound import CatalogQueryError, VersionStateUnknown

logger = get_logger(__name__)

_TABLE = quote_identifier(BOOKKEEPING_TABLE)
_NAME = quote_identifier(BOOKKEEPING_NAME_COLUMN)
_VERSION = quote_identifier(BOOKKEEPING_VERSION_COLUMN)

# Records match table names case-insensitively, like the catalog; an exact
# spelling wins over a case variant left by an older writer.
_SELECT_ONE_SQL = (
    f"SELECT {_VERSION} FROM {_TABLE} WHERE {_NAME} = ? COLLATE NOCASE "
    f"ORDER BY {_NAME} = ? DESC LIMIT 1"
)
_SELECT_ALL_SQL = f"SELECT {_NAME}, {_VERSION} FROM {_TABLE} ORDER BY {_NAME}"
_UPSERT_SQL = f"INSERT OR REPLACE INTO {_TABLE} ({_NAME}, {_VERSION}) VALUES (?, ?)"
_DELETE_SQL = f"DELETE FROM {_TABLE} WHERE {_NAME} = ? COLLATE NOCASE"
_PRUNE_VARIANTS_SQL = (
    f"DELETE FROM {_TABLE} WHERE {_NAME} = ? COLLATE NOCASE AND {_NAME} <> ?"
)

BOOKKEEPING_COLUMNS: list[tuple[str, str]] = [
    (BOOKKEEPING_NAME_COLUMN, "TEXT PRIMARY KEY"),
    (BOOKKEEPING_VERSION_COLUMN, "INTEGER"),
]
"""Column definition of the bookkeeping table."""


class VersionRegistry:
    """Reads and writes installed versions of managed tables."""

    def __init__(
        self,
        executor: QueryExecutor,
        catalog: TableCatalog,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._executor = executor
        self._catalog = catalog
        self._metrics = metrics or get_metrics()

    def bookkeeping_exists(self) -> bool:
        """Check whether the bookkeeping table is present.

        Raises:
            CatalogQueryError: If the catalog query fails.
        """
        return self._catalog.table_exists(BOOKKEEPING_TABLE)

    def lookup(self, name: str) -> VersionLookup:
        """Look up the installed version of a table with its full status."""
        table = TableName(name)
        try:
            if not self.bookkeeping_exists():
                return VersionLookup(table, VersionStatus.NO_BOOKKEEPING)

            result = self._executor.query(_SELECT_ONE_SQL, (name, name))
            if not result.success:
                logger.warning("version_query_failed", table=name, error=result.message)
                return VersionLookup(table, VersionStatus.QUERY_FAILED)

            if result.rows:
                try:
                    record = VersionRecord.from_row(name, result.rows[0][0])
                except MalformedRecordError as e:
                    logger.warning("version_record_malformed", table=name, error=str(e))
                    return VersionLookup(table, VersionStatus.MALFORMED)
                return VersionLookup(table, VersionStatus.TRACKED, record.version)

            if self._catalog.table_exists(name):
                return VersionLookup(table, VersionStatus.UNSTAMPED)
            return VersionLookup(table, VersionStatus.NOT_TRACKED)
        except CatalogQueryError as e:
            logger.warning("version_lookup_failed", table=name, error=str(e))
            return VersionLookup(table, VersionStatus.QUERY_FAILED)

    def get_version(self, name: str) -> int:
        """Return the installed version, NOT_TRACKED (0) or VERSION_UNKNOWN (-1)."""
        return self.lookup(name).value

    def require_version(self, name: str) -> SchemaVersion:
        """Return the installed version, raising if the state is unknown.

        Raises:
            VersionStateUnknown: If the lookup is neither TRACKED nor NOT_TRACKED.
        """
        found = self.lookup(name)
        if not found.is_known:
            raise VersionStateUnknown(
                f"Version of table '{name}' is unknown ({found.status.value})"
            )
        return found.value

    def set_version(self, name: str, version: int) -> ExecutionResult:
        """Record the installed version of a table.

        Replaces an existing record, so a table always has exactly one.
        The record is keyed by the name as spelled in the catalog, so any
        casing of the name reads it back. Fails if the version is not an
        integer in 0..MAX_VERSION, if the bookkeeping table is absent, or if
        the table itself is absent.
        """
        if not is_valid_version(version):
            return self._version_write_failed(
                name,
                f"Version must be a non-negative integer no larger than {MAX_VERSION}, "
                f"got {version!r}",
            )

        try:
            if not self.bookkeeping_exists():
                return self._version_write_failed(
                    name, f"Bookkeeping table {BOOKKEEPING_TABLE} does not exist"
                )
            canonical = self._catalog.canonical_name(name)
            if canonical is None:
                return self._version_write_failed(name, f"Table '{name}' does not exist")
        except CatalogQueryError as e:
            return self._version_write_failed(name, str(e))

        result = self._executor.execute(_UPSERT_SQL, (canonical, version))
        if not result.success:
            return self._version_write_failed(name, result.message)
        pruned = self._executor.execute(_PRUNE_VARIANTS_SQL, (canonical, canonical))
        if not pruned.success:
            logger.warning("version_variants_not_pruned", table=canonical, error=pruned.message)

        self._metrics.version_writes_total.labels(status="success").inc()
        logger.info("version_set", table=canonical, version=version)
        return ExecutionResult.ok(f"Version of '{name}' set to {version}", affected_rows=1)

    def clear_version(self, name: str) -> ExecutionResult:
        """Delete the bookkeeping record of a table.

        Removing a record that does not exist succeeds with no effect.
        """
        try:
            if not self.bookkeeping_exists():
                return ExecutionResult.error(
                    f"Bookkeeping table {BOOKKEEPING_TABLE} does not exist"
                )
        except CatalogQueryError as e:
            return ExecutionResult.error(str(e))

        result = self._executor.execute(_DELETE_SQL, (name,))
        if result.success:
            logger.info("version_cleared", table=name, removed=result.affected_rows)
        return result

    def records(self) -> list[VersionRecord]:
        """Return every well-formed bookkeeping record, sorted by table name.

        Malformed rows are skipped and logged.

        Raises:
            VersionStateUnknown: If the bookkeeping table is absent or unreadable.
        """
        try:
            present = self.bookkeeping_exists()
        except CatalogQueryError as e:
            raise VersionStateUnknown(str(e)) from e
        if not present:
            raise VersionStateUnknown(f"Bookkeeping table {BOOKKEEPING_TABLE} does not exist")

        result = self._executor.query(_SELECT_ALL_SQL)
        if not result.success:
            raise VersionStateUnknown(f"Cannot read bookkeeping table: {result.message}")

        records = []
        for row in result.rows:
            try:
                records.append(VersionRecord.from_row(row[0], row[1]))
            except MalformedRecordError as e:
                logger.warning("version_record_skipped", table=row[0], error=str(e))
        return records

    def _version_write_failed(self, name: str, reason: str) -> ExecutionResult:
        self._metrics.version_writes_total.labels(status="error").inc()
        logger.warning("version_set_failed", table=name, reason=reason)
        if reason.startswith("Error: "):
            reason = reason[len("Error: "):]
        return ExecutionResult.error(reason)
