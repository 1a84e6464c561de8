"""Statement outcomes shared by every component.

Components report success or failure through an ExecutionResult instead
of raising, so the caller decides whether a failure is fatal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Row:
    """A row of data returned by the executor.

    Rows can be accessed by column name or index.
    """

    columns: list[str]
    values: list[Any]

    def __getitem__(self, key: str | int) -> Any:
        if isinstance(key, int):
            return self.values[key]
        try:
            idx = self.columns.index(key)
            return self.values[idx]
        except ValueError as e:
            raise KeyError(f"Column '{key}' not found") from e

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={v!r}" for c, v in zip(self.columns, self.values))
        return f"Row({pairs})"


@dataclass
class ExecutionResult:
    """Result of a statement or lifecycle operation.

    Successful messages start with "OK"; failures start with "Error:".
    """

    rows: list[Row] = field(default_factory=list)
    affected_rows: int = 0
    message: str = "OK"
    columns: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.message.startswith("OK")

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, detail: str = "", **kwargs: Any) -> ExecutionResult:
        return cls(message=f"OK: {detail}" if detail else "OK", **kwargs)

    @classmethod
    def error(cls, detail: str) -> ExecutionResult:
        return cls(message=f"Error: {detail}")
