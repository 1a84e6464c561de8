"""Store Handle port for the shared database connection.

This outbound port defines the contract for the single connection every
component borrows. Exactly one scope owns the handle: it opens it once
and closes it once after all schema operations have finished.
"""

from __future__ import annotations

import sqlite3
from abc import abstractmethod
from typing import Protocol


class StoreHandle(Protocol):
    """Protocol for the process-wide store connection.

    Thread Safety:
        None. All schema operations run on one logical thread of control,
        and closing while another operation is in flight is unsupported.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Return the store location (file path or ":memory:")."""
        ...

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Check whether the handle is currently open."""
        ...

    @property
    @abstractmethod
    def connection(self) -> sqlite3.Connection:
        """Return the underlying connection.

        Raises:
            StoreClosedError: If the handle is not open.
        """
        ...

    @abstractmethod
    def open(self) -> None:
        """Open the store.

        Raises:
            StoreOpenError: If the store cannot be opened.
            RuntimeError: If the handle was already opened.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the store.

        Raises:
            RuntimeError: If the handle is not open.
        """
        ...


class StoreClosedError(Exception):
    """Raised when the connection of an unopened or closed handle is requested."""

    pass
