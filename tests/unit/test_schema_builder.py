"""Unit tests for the Schema Builder."""

from __future__ import annotations

import sqlite3

import pytest

from versioned_store.domain.services import (
    build_create_statement,
    build_drop_statement,
    quote_identifier,
)
from versioned_store.domain.value_objects import ColumnDef


class TestQuoteIdentifier:
    """Tests for identifier quoting."""

    def test_plain_name(self) -> None:
        assert quote_identifier("UserData") == '"UserData"'

    def test_reserved_word(self) -> None:
        assert quote_identifier("order") == '"order"'

    def test_embedded_quote_doubled(self) -> None:
        assert quote_identifier('we"ird') == '"we""ird"'

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            quote_identifier("")


class TestBuildCreateStatement:
    """Tests for CREATE TABLE rendering."""

    def test_column_order_preserved(self) -> None:
        sql = build_create_statement(
            "UserData", [("id", "TEXT PRIMARY KEY"), ("weight", "REAL")]
        )
        assert sql == 'CREATE TABLE "UserData" ("id" TEXT PRIMARY KEY, "weight" REAL)'

    def test_accepts_column_defs(self) -> None:
        sql = build_create_statement("t", [ColumnDef("b", "TEXT"), ColumnDef("a", "INTEGER")])
        assert sql == 'CREATE TABLE "t" ("b" TEXT, "a" INTEGER)'

    def test_bookkeeping_layout(self) -> None:
        sql = build_create_statement(
            "TablesVersions", [("tableName", "TEXT PRIMARY KEY"), ("version", "INTEGER")]
        )
        assert sql == (
            'CREATE TABLE "TablesVersions" ("tableName" TEXT PRIMARY KEY, "version" INTEGER)'
        )

    def test_empty_columns_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_create_statement("UserData", [])

    def test_duplicate_columns_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_create_statement("UserData", [("id", "TEXT"), ("id", "TEXT")])

    def test_reserved_words_are_executable(self) -> None:
        """Generated DDL runs on SQLite even with reserved and quoted names."""
        sql = build_create_statement('se"lect', [("order", "INTEGER"), ("group", "TEXT")])

        conn = sqlite3.connect(":memory:")
        try:
            conn.execute(sql)
            columns = [row[1] for row in conn.execute('PRAGMA table_info("se""lect")')]
        finally:
            conn.close()

        assert columns == ["order", "group"]


class TestBuildDropStatement:
    """Tests for DROP TABLE rendering."""

    def test_drop(self) -> None:
        assert build_drop_statement("UserData") == 'DROP TABLE "UserData"'

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_drop_statement("")
