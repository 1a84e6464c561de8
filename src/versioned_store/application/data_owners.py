"""Data owners: application tables that provision themselves at startup.

A data owner knows three things about its table (name, column
definition, expected version) and uses only the SchemaManager surface to
make the table exist with a version record.

Provisioning rules:
    - Table absent: create it, then stamp the expected version.
    - Table present without a usable version record: stamp the expected
      version. This repairs a previous run that created the table but
      stopped before the stamp was written.
    - Table present and stamped: nothing to do. A stamped version other
      than the expected one is logged; upgrading it is up to a migration.
"""

from __future__ import annotations

from typing import Sequence

from versioned_store.domain.value_objects import VERSION_UNKNOWN, ColumnSpec
from versioned_store.infrastructure.logging import get_logger
from versioned_store.ports.inbound import CatalogQueryError, SchemaManager

logger = get_logger(__name__)


class ManagedTable:
    """Generic DataOwner for one managed table."""

    def __init__(self, table_name: str, columns: Sequence[ColumnSpec], version: int = 1) -> None:
        self._table_name = table_name
        self._columns = list(columns)
        self._version = version

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def columns(self) -> Sequence[ColumnSpec]:
        return list(self._columns)

    @property
    def version(self) -> int:
        return self._version

    def provision(self, schema: SchemaManager) -> bool:
        """Ensure the table exists and carries a version record.

        Returns:
            True if the table is present and stamped afterwards.
        """
        log = logger.bind(table=self._table_name, version=self._version)

        try:
            existed = schema.table_exists(self._table_name)
        except CatalogQueryError as e:
            log.error("provision_catalog_failed", error=str(e))
            return False

        if existed:
            installed = schema.get_version(self._table_name)
            if installed != VERSION_UNKNOWN:
                if installed != self._version:
                    log.warning("provision_version_mismatch", installed=installed)
                return True
            log.warning("provision_restamping_unstamped_table")
        else:
            created = schema.ensure_table(self._table_name, self._columns)
            if not created:
                log.error("provision_create_failed", error=created.message)
                return False

        stamped = schema.set_version(self._table_name, self._version)
        if not stamped:
            log.error("provision_stamp_failed", error=stamped.message)
            return False

        log.info("provisioned")
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._table_name!r}, version={self._version})"


USER_MEASUREMENTS_TABLE = "UserMeasurements"

USER_MEASUREMENT_COLUMNS: list[tuple[str, str]] = [
    ("dateTime", "TEXT PRIMARY KEY"),
    ("weight", "REAL"),
    ("bodyFatPercent", "REAL"),
    ("waterPercent", "REAL"),
    ("musclePercent", "REAL"),
]


class UserMeasurementTable(ManagedTable):
    """Owner of the weight measurement table (one row per scale reading)."""

    SCHEMA_VERSION = 1

    def __init__(self, table_name: str = USER_MEASUREMENTS_TABLE) -> None:
        super().__init__(table_name, USER_MEASUREMENT_COLUMNS, self.SCHEMA_VERSION)
