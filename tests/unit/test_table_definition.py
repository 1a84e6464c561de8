"""Unit tests for identifiers and table definitions."""

from __future__ import annotations

import pytest

from versioned_store.domain.value_objects import (
    BOOKKEEPING_TABLE,
    NOT_TRACKED,
    VERSION_UNKNOWN,
    ColumnDef,
    TableDefinition,
    is_valid_version,
)


class TestIdentifiers:
    """Tests for sentinel values and version validation."""

    def test_sentinels(self) -> None:
        assert NOT_TRACKED == 0
        assert VERSION_UNKNOWN == -1
        assert BOOKKEEPING_TABLE == "TablesVersions"

    @pytest.mark.parametrize("value", [0, 1, 42, 2**63 - 1])
    def test_valid_versions(self, value: int) -> None:
        assert is_valid_version(value)

    @pytest.mark.parametrize("value", [-1, 2**63, 1.0, "1", None, True])
    def test_invalid_versions(self, value: object) -> None:
        assert not is_valid_version(value)


class TestColumnDef:
    """Tests for ColumnDef."""

    def test_creation(self) -> None:
        col = ColumnDef("weight", "REAL")
        assert col.name == "weight"
        assert col.type_clause == "REAL"
        assert repr(col) == "ColumnDef(weight REAL)"

    def test_empty_name(self) -> None:
        with pytest.raises(ValueError, match="name"):
            ColumnDef("", "REAL")

    def test_empty_type(self) -> None:
        with pytest.raises(ValueError, match="type clause"):
            ColumnDef("weight", "  ")

    def test_immutable(self) -> None:
        col = ColumnDef("weight", "REAL")
        with pytest.raises(AttributeError):
            col.name = "other"  # type: ignore[misc]


class TestTableDefinition:
    """Tests for TableDefinition."""

    def test_from_pairs_preserves_order(self) -> None:
        definition = TableDefinition.of(
            "UserData", [("id", "TEXT PRIMARY KEY"), ("weight", "REAL"), ("note", "TEXT")]
        )

        assert definition.name == "UserData"
        assert definition.column_names == ["id", "weight", "note"]

    def test_accepts_column_defs(self) -> None:
        definition = TableDefinition.of("t", [ColumnDef("a", "INTEGER"), ["b", "TEXT"]])
        assert definition.columns == (ColumnDef("a", "INTEGER"), ColumnDef("b", "TEXT"))

    def test_empty_columns_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one column"):
            TableDefinition.of("UserData", [])

    def test_empty_table_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="Table name"):
            TableDefinition.of("", [("id", "TEXT")])

    def test_duplicate_columns_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate column"):
            TableDefinition.of("t", [("id", "TEXT"), ("ID", "INTEGER")])

    @pytest.mark.parametrize("spec", ["id", ("id",), ("id", "TEXT", "extra")])
    def test_malformed_pair_rejected(self, spec: object) -> None:
        with pytest.raises(ValueError, match="pair"):
            TableDefinition.of("t", [spec])  # type: ignore[list-item]
