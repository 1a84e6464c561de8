"""Unit tests for the Bootstrap Sequencer."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest
from prometheus_client import CollectorRegistry

from versioned_store.adapters import SQLiteStore
from versioned_store.application import bootstrap
from versioned_store.application import (
    BootstrapReport,
    BootstrapSequencer,
    BootstrapState,
    FailureKind,
    ManagedTable,
    UserMeasurementTable,
    open_store,
)
from versioned_store.infrastructure.config import Config, ObservabilityConfig
from versioned_store.infrastructure.metrics import MetricsRegistry
from versioned_store.ports import (
    CatalogQueryError,
    PartialProvisioningFailure,
    SchemaManager,
    StatementFailure,
    StoreOpenError,
)


class FailingOwner:
    """Data owner whose provisioning always reports failure."""

    def __init__(self, table_name: str, raises: bool = False) -> None:
        self.table_name = table_name
        self.columns: Sequence[tuple[str, str]] = [("id", "TEXT")]
        self.version = 1
        self._raises = raises
        self.calls = 0

    def provision(self, schema: SchemaManager) -> bool:
        self.calls += 1
        if self._raises:
            raise CatalogQueryError(f"catalog unavailable for {self.table_name}")
        return False


class CrashingOwner(FailingOwner):
    """Data owner whose provisioning raises an unexpected error."""

    def provision(self, schema: SchemaManager) -> bool:
        self.calls += 1
        raise ValueError("boom")


class TestBootstrapSequencer:
    """Tests for the bootstrap state machine."""

    def test_ready(self, metrics_registry: MetricsRegistry) -> None:
        store = SQLiteStore()
        sequencer = BootstrapSequencer(store, [UserMeasurementTable()], metrics_registry)
        assert sequencer.state is BootstrapState.UNOPENED

        try:
            report = sequencer.run()

            assert report.ready
            assert sequencer.state is BootstrapState.READY
            assert report.failure is None
            assert report.provisioned_tables == ("UserMeasurements",)
            assert sequencer.schema.table_exists("TablesVersions")
            assert sequencer.schema.get_version("UserMeasurements") == 1
        finally:
            store.close()

    def test_ready_without_owners(self, metrics_registry: MetricsRegistry) -> None:
        store = SQLiteStore()
        try:
            report = BootstrapSequencer(store, metrics=metrics_registry).run()
            assert report.ready
            assert report.provisioned_tables == ()
        finally:
            store.close()

    def test_open_failure(self, temp_dir: Path, metrics_registry: MetricsRegistry) -> None:
        store = SQLiteStore(temp_dir / "missing" / "store.db")
        owner = FailingOwner("UserData")
        sequencer = BootstrapSequencer(store, [owner], metrics_registry)

        report = sequencer.run()

        assert report.state is BootstrapState.FAILED
        assert report.failure is FailureKind.OPEN_FAILURE
        assert report.is_fatal
        assert owner.calls == 0
        assert not store.is_open
        with pytest.raises(RuntimeError):
            _ = sequencer.schema

    def test_bookkeeping_failure_is_fatal(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        """A store where the bookkeeping table cannot be created stops the sequence."""
        path = temp_dir / "store.db"
        with SQLiteStore(path) as prepared:
            # a view holds the name, so CREATE TABLE fails
            prepared.connection.execute('CREATE VIEW "TablesVersions" AS SELECT 1 AS one')

        store = SQLiteStore(path)
        owner = FailingOwner("UserData")
        try:
            report = BootstrapSequencer(store, [owner], metrics_registry).run()

            assert report.state is BootstrapState.FAILED
            assert report.failure is FailureKind.BOOKKEEPING_FAILURE
            assert report.failed_tables == ("TablesVersions",)
            assert report.is_fatal
            assert report.reason
            assert owner.calls == 0
        finally:
            store.close()

    def test_partial_failure_collects_every_owner(self, metrics_registry: MetricsRegistry) -> None:
        store = SQLiteStore()
        first = FailingOwner("Broken1")
        second = FailingOwner("Broken2", raises=True)
        good = ManagedTable("Good", [("id", "TEXT")])
        sequencer = BootstrapSequencer(store, [first, good, second], metrics_registry)

        try:
            report = sequencer.run()

            assert report.state is BootstrapState.FAILED
            assert report.failure is FailureKind.PARTIAL_PROVISIONING
            assert not report.is_fatal
            assert report.failed_tables == ("Broken1", "Broken2")
            assert report.provisioned_tables == ("Good",)
            assert first.calls == 1 and second.calls == 1
            assert sequencer.schema.get_version("Good") == 1
        finally:
            store.close()

    def test_unexpected_owner_error_is_collected(self, metrics_registry: MetricsRegistry) -> None:
        store = SQLiteStore()
        crashing = CrashingOwner("Crashing")
        good = ManagedTable("Good", [("id", "TEXT")])
        sequencer = BootstrapSequencer(store, [crashing, good], metrics_registry)

        try:
            report = sequencer.run()

            assert sequencer.state is BootstrapState.FAILED
            assert report.failure is FailureKind.PARTIAL_PROVISIONING
            assert report.failed_tables == ("Crashing",)
            assert report.provisioned_tables == ("Good",)
            assert crashing.calls == 1
            assert sequencer.schema.get_version("Good") == 1
        finally:
            store.close()

    def test_runs_once(self, metrics_registry: MetricsRegistry) -> None:
        store = SQLiteStore()
        sequencer = BootstrapSequencer(store, metrics=metrics_registry)
        try:
            first = sequencer.run()
            with pytest.raises(RuntimeError, match="already ran"):
                sequencer.run()
            assert sequencer.report is first
        finally:
            store.close()

    def test_metrics(
        self, metrics_registry: MetricsRegistry, collector_registry: CollectorRegistry
    ) -> None:
        store = SQLiteStore()
        try:
            BootstrapSequencer(store, [FailingOwner("Broken")], metrics_registry).run()
        finally:
            store.close()

        assert collector_registry.get_sample_value(
            "store_bootstrap_total", {"state": "failed"}
        ) == 1.0
        assert collector_registry.get_sample_value(
            "store_provisioning_failures_total", {"table": "Broken"}
        ) == 1.0


class TestBootstrapReport:
    """Tests for report messages and exceptions."""

    def test_ready_report(self) -> None:
        report = BootstrapReport(
            state=BootstrapState.READY, location="/tmp/s.db", provisioned_tables=("a",)
        )
        report.raise_for_failure()
        assert "ready" in report.describe()

    def test_open_failure_report(self) -> None:
        report = BootstrapReport(
            state=BootstrapState.FAILED,
            location="/tmp/s.db",
            failure=FailureKind.OPEN_FAILURE,
            reason="unable to open database file",
        )
        assert report.describe().startswith("Cannot open the database /tmp/s.db")
        with pytest.raises(StoreOpenError, match="unable to open"):
            report.raise_for_failure()

    def test_bookkeeping_failure_report(self) -> None:
        report = BootstrapReport(
            state=BootstrapState.FAILED,
            location=":memory:",
            failure=FailureKind.BOOKKEEPING_FAILURE,
            failed_tables=("TablesVersions",),
        )
        assert "TablesVersions" in report.describe()
        with pytest.raises(StatementFailure):
            report.raise_for_failure()

    def test_partial_failure_report(self) -> None:
        report = BootstrapReport(
            state=BootstrapState.FAILED,
            location=":memory:",
            failure=FailureKind.PARTIAL_PROVISIONING,
            failed_tables=("a", "b"),
        )
        assert "a, b" in report.describe()
        with pytest.raises(PartialProvisioningFailure) as exc_info:
            report.raise_for_failure()
        assert exc_info.value.failed_tables == ["a", "b"]


class CountingStore(SQLiteStore):
    """In-memory store that counts close calls."""

    def __init__(self) -> None:
        super().__init__()
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        super().close()


class TestOpenStore:
    """Tests for the owning scope."""

    def test_yields_ready_session(self, metrics_registry: MetricsRegistry) -> None:
        store = CountingStore()

        with open_store([UserMeasurementTable()], store=store, metrics=metrics_registry) as session:
            assert session.report.ready
            assert session.schema is not None
            assert session.schema.get_version("UserMeasurements") == 1
            assert store.is_open

        assert not store.is_open
        assert store.close_calls == 1

    def test_applies_observability_config(
        self,
        monkeypatch: pytest.MonkeyPatch,
        test_config: Config,
        metrics_registry: MetricsRegistry,
        collector_registry: CollectorRegistry,
    ) -> None:
        applied: list[ObservabilityConfig] = []

        def fake_setup(config: ObservabilityConfig) -> MetricsRegistry:
            applied.append(config)
            return metrics_registry

        monkeypatch.setattr(bootstrap, "setup_observability", fake_setup)

        with open_store(config=test_config) as session:
            assert session.report.ready

        assert applied == [test_config.observability]
        assert collector_registry.get_sample_value(
            "store_bootstrap_total", {"state": "ready"}
        ) == 1.0

    def test_uses_configured_file(
        self, test_config: Config, metrics_registry: MetricsRegistry
    ) -> None:
        with open_store(config=test_config, metrics=metrics_registry) as session:
            assert session.report.ready
            assert session.report.location == str(test_config.storage.db_path)

        assert test_config.storage.db_path.exists()

    def test_closes_after_error_in_block(self, metrics_registry: MetricsRegistry) -> None:
        store = CountingStore()

        with pytest.raises(ValueError):
            with open_store(store=store, metrics=metrics_registry):
                raise ValueError("boom")

        assert store.close_calls == 1

    def test_failed_session(self, metrics_registry: MetricsRegistry) -> None:
        store = CountingStore()

        with open_store([FailingOwner("Broken")], store=store, metrics=metrics_registry) as session:
            assert session.report.failure is FailureKind.PARTIAL_PROVISIONING
            assert session.schema is not None

        assert store.close_calls == 1

    def test_raise_on_failure(self, metrics_registry: MetricsRegistry) -> None:
        store = CountingStore()

        with pytest.raises(PartialProvisioningFailure):
            with open_store(
                [FailingOwner("Broken")],
                store=store,
                metrics=metrics_registry,
                raise_on_failure=True,
            ):
                pytest.fail("block must not run")

        assert store.close_calls == 1

    def test_open_failure_yields_no_schema(
        self, temp_dir: Path, metrics_registry: MetricsRegistry
    ) -> None:
        store = SQLiteStore(temp_dir / "missing" / "store.db")

        with open_store(store=store, metrics=metrics_registry) as session:
            assert session.report.failure is FailureKind.OPEN_FAILURE
            assert session.schema is None
            assert "Please check your environment" in session.report.describe()
