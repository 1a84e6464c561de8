"""Pytest configuration and fixtures for versioned_store tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from versioned_store.adapters import SQLiteStore
from versioned_store.application import (
    BOOKKEEPING_COLUMNS,
    QueryExecutor,
    SQLiteSchemaManager,
    TableCatalog,
)
from versioned_store.domain.value_objects import BOOKKEEPING_TABLE
from versioned_store.infrastructure.config import Config, ObservabilityConfig, StorageConfig
from versioned_store.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with a temporary data directory."""
    return Config(
        storage=StorageConfig(
            data_dir=temp_dir / "data",
            file_name="test.db",
            timeout_seconds=1.0,
        ),
        observability=ObservabilityConfig(log_level="DEBUG"),
    )


@pytest.fixture
def collector_registry() -> CollectorRegistry:
    """Provide a separate Prometheus registry to avoid conflicts between tests."""
    return CollectorRegistry(auto_describe=True)


@pytest.fixture
def metrics_registry(collector_registry: CollectorRegistry) -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    return MetricsRegistry(registry=collector_registry)


@pytest.fixture
def store() -> Generator[SQLiteStore, None, None]:
    """Provide an open in-memory store."""
    s = SQLiteStore()
    s.open()
    yield s
    if s.is_open:
        s.close()


@pytest.fixture
def executor(store: SQLiteStore, metrics_registry: MetricsRegistry) -> QueryExecutor:
    """Provide a query executor bound to the in-memory store."""
    return QueryExecutor(store, metrics_registry)


@pytest.fixture
def catalog(executor: QueryExecutor) -> TableCatalog:
    """Provide a table catalog bound to the in-memory store."""
    return TableCatalog(executor)


@pytest.fixture
def schema(store: SQLiteStore, metrics_registry: MetricsRegistry) -> SQLiteSchemaManager:
    """Provide a schema manager over a store without bookkeeping."""
    return SQLiteSchemaManager(store, metrics_registry)


@pytest.fixture
def bookkept_schema(schema: SQLiteSchemaManager) -> SQLiteSchemaManager:
    """Provide a schema manager whose store already has the bookkeeping table."""
    assert schema.ensure_table(BOOKKEEPING_TABLE, BOOKKEEPING_COLUMNS).success
    return schema


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
