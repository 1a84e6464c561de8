"""SQLite Store Handle implementation.

This adapter implements the StoreHandle protocol with the standard
library sqlite3 module. It owns a single connection to a single store
file and enforces the open-once/close-once lifecycle.

Connection settings:
    - Autocommit (isolation_level=None): each statement is atomic on its
      own and nothing is wrapped in an implicit transaction.
    - Busy timeout from configuration.
    - PRAGMA foreign_keys=ON.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from versioned_store.infrastructure.config import StorageConfig
from versioned_store.infrastructure.logging import get_logger
from versioned_store.ports.inbound import StoreOpenError
from versioned_store.ports.outbound import StoreClosedError

MEMORY_LOCATION = ":memory:"

logger = get_logger(__name__)


class SQLiteStore:
    """SQLite implementation of the StoreHandle protocol.

    A handle goes through Unopened -> Open -> Closed exactly once; it
    cannot be reopened after close.

    Attributes:
        location: Path of the store file, or ":memory:".
    """

    def __init__(
        self,
        location: str | Path = MEMORY_LOCATION,
        timeout_seconds: float = 5.0,
    ) -> None:
        """Initialize the handle without opening it.

        Args:
            location: Path of the store file, or ":memory:".
            timeout_seconds: How long to wait on a locked database.
        """
        self._location = str(location)
        self._timeout = timeout_seconds
        self._conn: sqlite3.Connection | None = None
        self._opened = False
        self._closed = False

    @classmethod
    def from_config(cls, config: StorageConfig) -> SQLiteStore:
        """Create a handle for the configured store file."""
        return cls(config.db_path, timeout_seconds=config.timeout_seconds)

    @property
    def location(self) -> str:
        return self._location

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreClosedError(f"Store {self._location} is not open")
        return self._conn

    def open(self) -> None:
        """Open the store file.

        The connection is probed with a catalog read so that a missing
        directory or a file that is not a database fails here, not on
        the first schema operation.

        Raises:
            RuntimeError: If the handle was already opened.
            StoreOpenError: If the store cannot be opened.
        """
        if self._opened:
            raise RuntimeError(f"Store {self._location} already opened")
        self._opened = True

        conn: sqlite3.Connection | None = None
        try:
            conn = sqlite3.connect(
                self._location,
                timeout=self._timeout,
                isolation_level=None,
            )
            conn.execute("PRAGMA foreign_keys = ON")
            conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as e:
            if conn is not None:
                conn.close()
            logger.error("store_open_failed", location=self._location, error=str(e))
            raise StoreOpenError(f"Cannot open the database {self._location}: {e}") from e

        self._conn = conn
        logger.debug("store_opened", location=self._location)

    def close(self) -> None:
        """Close the store.

        Raises:
            RuntimeError: If the store is not open.
        """
        if self._conn is None:
            state = "already closed" if self._closed else "not open"
            raise RuntimeError(f"Store {self._location} {state}")

        self._conn.close()
        self._conn = None
        self._closed = True
        logger.debug("store_closed", location=self._location)

    def __enter__(self) -> SQLiteStore:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        if self.is_open:
            self.close()
