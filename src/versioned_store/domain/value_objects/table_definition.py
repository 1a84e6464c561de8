"""Table definitions: the ordered column list a data owner provisions.

A definition is validated when it is built, so a malformed one never
reaches the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from versioned_store.domain.value_objects.identifiers import TableName


@dataclass(frozen=True, slots=True)
class ColumnDef:
    """A single column of a table definition.

    Attributes:
        name: Column name, quoted when rendered.
        type_clause: Type and constraints, rendered verbatim
            (e.g. "TEXT PRIMARY KEY").

    Example:
        >>> ColumnDef("weight", "REAL")
        ColumnDef(weight REAL)
    """

    name: str
    type_clause: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Column name must not be empty")
        if not self.type_clause or not self.type_clause.strip():
            raise ValueError(f"Column '{self.name}' has an empty type clause")

    def __repr__(self) -> str:
        return f"ColumnDef({self.name} {self.type_clause})"


ColumnSpec = Union[ColumnDef, Sequence[str]]
"""A ColumnDef or a (name, type_clause) pair."""


def _to_column(spec: ColumnSpec) -> ColumnDef:
    if isinstance(spec, ColumnDef):
        return spec
    if not isinstance(spec, (tuple, list)) or len(spec) != 2:
        raise ValueError(f"Column must be a (name, type) pair, got {spec!r}")
    name, type_clause = spec
    return ColumnDef(name, type_clause)


@dataclass(frozen=True, slots=True)
class TableDefinition:
    """Ordered, non-empty column list for one table.

    Column order is preserved verbatim. Column names must be unique;
    uniqueness is checked case-insensitively because SQLite treats
    identifiers that way.
    """

    name: TableName
    columns: tuple[ColumnDef, ...]

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Table name must not be empty")
        if not self.columns:
            raise ValueError(f"Table '{self.name}' must define at least one column")

        seen: set[str] = set()
        for column in self.columns:
            key = column.name.lower()
            if key in seen:
                raise ValueError(
                    f"Duplicate column '{column.name}' in table '{self.name}'"
                )
            seen.add(key)

    @classmethod
    def of(cls, name: str, columns: Iterable[ColumnSpec]) -> TableDefinition:
        """Build a definition from (name, type_clause) pairs or ColumnDefs."""
        return cls(TableName(name), tuple(_to_column(c) for c in columns))

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]
