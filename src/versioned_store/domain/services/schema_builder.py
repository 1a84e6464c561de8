"""Schema Builder: renders table definitions as SQLite DDL.

Identifiers are rendered with sqlglot's SQLite dialect so that reserved
words and embedded quotes survive. Column type clauses are appended
verbatim; they are caller-owned SQL (e.g. "TEXT PRIMARY KEY").

Values never appear in the generated DDL. Statements that carry values
bind them as parameters at execution time.
"""

from __future__ import annotations

from typing import Iterable

from sqlglot import exp

from versioned_store.domain.value_objects import ColumnSpec, TableDefinition

DIALECT = "sqlite"


def quote_identifier(name: str) -> str:
    """Quote a table or column name for SQLite.

    Args:
        name: Raw identifier.

    Returns:
        The identifier wrapped in double quotes, embedded quotes doubled.

    Raises:
        ValueError: If the name is empty.
    """
    if not name or not name.strip():
        raise ValueError("Identifier must not be empty")
    return exp.to_identifier(name, quoted=True).sql(dialect=DIALECT)


def build_create_statement(table_name: str, columns: Iterable[ColumnSpec]) -> str:
    """Build a CREATE TABLE statement.

    Args:
        table_name: Name of the table to create.
        columns: Ordered (name, type_clause) pairs or ColumnDefs.

    Returns:
        The CREATE TABLE statement, columns in the given order.

    Raises:
        ValueError: If the table name is empty, the column list is empty,
            or a column is malformed or duplicated.

    Example:
        >>> build_create_statement("UserData", [("id", "TEXT PRIMARY KEY"), ("weight", "REAL")])
        'CREATE TABLE "UserData" ("id" TEXT PRIMARY KEY, "weight" REAL)'
    """
    definition = TableDefinition.of(table_name, columns)
    return build_create_from_definition(definition)


def build_create_from_definition(definition: TableDefinition) -> str:
    """Build a CREATE TABLE statement from a validated definition."""
    column_sql = ", ".join(
        f"{quote_identifier(c.name)} {c.type_clause.strip()}" for c in definition.columns
    )
    return f"CREATE TABLE {quote_identifier(definition.name)} ({column_sql})"


def build_drop_statement(table_name: str) -> str:
    """Build a DROP TABLE statement.

    Example:
        >>> build_drop_statement("UserData")
        'DROP TABLE "UserData"'
    """
    return f"DROP TABLE {quote_identifier(table_name)}"
