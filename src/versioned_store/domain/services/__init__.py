"""Domain services for the versioned store.

Exports:
    - build_create_statement: Render a CREATE TABLE statement
    - build_create_from_definition: Same, from a TableDefinition
    - build_drop_statement: Render a DROP TABLE statement
    - quote_identifier: Quote a table or column name for SQLite
"""

from versioned_store.domain.services.schema_builder import (
    build_create_from_definition,
    build_create_statement,
    build_drop_statement,
    quote_identifier,
)

__all__ = [
    "build_create_statement",
    "build_create_from_definition",
    "build_drop_statement",
    "quote_identifier",
]
