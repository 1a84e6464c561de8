"""Bootstrap Sequencer: open the store and provision every managed table.

State machine:

    UNOPENED -> OPENING -> OPENED -> READY
                   |          |
                   +----------+-------> FAILED

1. UNOPENED -> OPENING: open the store handle.
2. OPENING -> FAILED if the open attempt fails (OPEN_FAILURE).
3. OPENING -> OPENED once the bookkeeping table exists; failing to create
   it is fatal (BOOKKEEPING_FAILURE).
4. OPENED -> READY after every data owner provisioned its table. Owners
   are all run even when one fails; any failure ends in FAILED with the
   list of failed tables (PARTIAL_PROVISIONING).

The terminal report is produced once. There are no retries: the
surrounding application decides whether to proceed, abort, or degrade.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Generator, Iterable, Sequence

from versioned_store.adapters.outbound import SQLiteStore
from versioned_store.application.schema_manager import SQLiteSchemaManager
from versioned_store.domain.value_objects import BOOKKEEPING_TABLE
from versioned_store.infrastructure.config import Config, get_config
from versioned_store.infrastructure.logging import get_logger
from versioned_store.infrastructure.metrics import MetricsRegistry, get_metrics
from versioned_store.infrastructure.observability import setup_observability
from versioned_store.infrastructure.tracing import trace_span
from versioned_store.ports.inbound import (
    DataOwner,
    PartialProvisioningFailure,
    SchemaError,
    StatementFailure,
    StoreOpenError,
)
from versioned_store.ports.outbound import StoreHandle

logger = get_logger(__name__)


class BootstrapState(Enum):
    """States of the bootstrap sequence."""

    UNOPENED = "unopened"
    OPENING = "opening"
    OPENED = "opened"
    READY = "ready"
    FAILED = "failed"


class FailureKind(Enum):
    """Why a bootstrap sequence failed."""

    OPEN_FAILURE = "open_failure"
    BOOKKEEPING_FAILURE = "bookkeeping_failure"
    PARTIAL_PROVISIONING = "partial_provisioning"


_FAILURE_MESSAGES = {
    FailureKind.OPEN_FAILURE: "Cannot open the database {location}. Please check your environment.",
    FailureKind.BOOKKEEPING_FAILURE: "Cannot create table {tables}. Please check your environment.",
    FailureKind.PARTIAL_PROVISIONING: "Cannot create table(s) {tables}. Please check your environment.",
}


@dataclass(frozen=True)
class BootstrapReport:
    """Terminal outcome of a bootstrap sequence."""

    state: BootstrapState
    location: str
    failure: FailureKind | None = None
    reason: str = ""
    failed_tables: tuple[str, ...] = ()
    provisioned_tables: tuple[str, ...] = ()

    @property
    def ready(self) -> bool:
        return self.state is BootstrapState.READY

    @property
    def is_fatal(self) -> bool:
        """True when nothing can be provisioned: the store or its bookkeeping is unusable."""
        return self.failure in (FailureKind.OPEN_FAILURE, FailureKind.BOOKKEEPING_FAILURE)

    def describe(self) -> str:
        """Return a human-readable message for the outcome."""
        if self.failure is None:
            return f"Database {self.location} ready ({len(self.provisioned_tables)} table(s) provisioned)."
        return _FAILURE_MESSAGES[self.failure].format(
            location=self.location,
            tables=", ".join(self.failed_tables),
        )

    def raise_for_failure(self) -> None:
        """Raise the exception matching the failure kind, if any.

        Raises:
            StoreOpenError: On OPEN_FAILURE.
            StatementFailure: On BOOKKEEPING_FAILURE.
            PartialProvisioningFailure: On PARTIAL_PROVISIONING.
        """
        if self.failure is FailureKind.OPEN_FAILURE:
            raise StoreOpenError(self.reason)
        if self.failure is FailureKind.BOOKKEEPING_FAILURE:
            raise StatementFailure(self.reason)
        if self.failure is FailureKind.PARTIAL_PROVISIONING:
            raise PartialProvisioningFailure(self.failed_tables)


class BootstrapSequencer:
    """Runs the startup sequence against one store handle."""

    def __init__(
        self,
        store: StoreHandle,
        owners: Iterable[DataOwner] = (),
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._store = store
        self._owners: list[DataOwner] = list(owners)
        self._metrics = metrics or get_metrics()
        self._state = BootstrapState.UNOPENED
        self._schema: SQLiteSchemaManager | None = None
        self._report: BootstrapReport | None = None

    @property
    def state(self) -> BootstrapState:
        return self._state

    @property
    def report(self) -> BootstrapReport | None:
        return self._report

    @property
    def schema(self) -> SQLiteSchemaManager:
        """The schema manager, available once the store is open.

        Raises:
            RuntimeError: If the store was never opened.
        """
        if self._schema is None:
            raise RuntimeError("Store is not open")
        return self._schema

    def run(self) -> BootstrapReport:
        """Run the sequence once and return the terminal report.

        Raises:
            RuntimeError: If the sequence already ran.
        """
        if self._state is not BootstrapState.UNOPENED:
            raise RuntimeError(f"Bootstrap already ran (state: {self._state.value})")

        with trace_span("bootstrap", {"store.location": self._store.location}):
            report = self._run()

        self._report = report
        self._metrics.bootstrap_total.labels(state=report.state.value).inc()
        if report.ready:
            logger.info("bootstrap_ready", location=report.location, tables=list(report.provisioned_tables))
        else:
            logger.error(
                "bootstrap_failed",
                location=report.location,
                failure=report.failure.value if report.failure else None,
                reason=report.reason,
                failed_tables=list(report.failed_tables),
            )
        return report

    def _run(self) -> BootstrapReport:
        location = self._store.location

        # Unopened -> Opening
        self._state = BootstrapState.OPENING
        with trace_span("bootstrap.open"):
            try:
                self._store.open()
            except StoreOpenError as e:
                return self._fail(FailureKind.OPEN_FAILURE, str(e))
        self._schema = SQLiteSchemaManager(self._store, self._metrics)

        # Opening -> Opened
        with trace_span("bootstrap.bookkeeping"):
            created = self._schema.ensure_bookkeeping()
        if not created:
            return self._fail(
                FailureKind.BOOKKEEPING_FAILURE, created.message, (BOOKKEEPING_TABLE,)
            )
        self._state = BootstrapState.OPENED

        # Opened -> Ready
        failed: list[str] = []
        provisioned: list[str] = []
        for owner in self._owners:
            with trace_span("bootstrap.provision", {"table": owner.table_name}):
                if self._provision(owner):
                    provisioned.append(owner.table_name)
                else:
                    self._metrics.provisioning_failures_total.labels(table=owner.table_name).inc()
                    failed.append(owner.table_name)

        if failed:
            return self._fail(
                FailureKind.PARTIAL_PROVISIONING,
                str(PartialProvisioningFailure(failed)),
                tuple(failed),
                tuple(provisioned),
            )

        self._state = BootstrapState.READY
        return BootstrapReport(
            state=BootstrapState.READY,
            location=location,
            provisioned_tables=tuple(provisioned),
        )

    def _provision(self, owner: DataOwner) -> bool:
        try:
            return owner.provision(self.schema)
        except SchemaError as e:
            logger.error("owner_provision_raised", table=owner.table_name, error=str(e))
            return False
        except Exception:
            # counted as a failed table; the remaining owners still run
            logger.exception("owner_provision_crashed", table=owner.table_name)
            return False

    def _fail(
        self,
        kind: FailureKind,
        reason: str,
        failed_tables: Sequence[str] = (),
        provisioned_tables: Sequence[str] = (),
    ) -> BootstrapReport:
        self._state = BootstrapState.FAILED
        return BootstrapReport(
            state=BootstrapState.FAILED,
            location=self._store.location,
            failure=kind,
            reason=reason,
            failed_tables=tuple(failed_tables),
            provisioned_tables=tuple(provisioned_tables),
        )


@dataclass
class StoreSession:
    """What the owning scope hands to the application after bootstrap."""

    report: BootstrapReport
    schema: SQLiteSchemaManager | None


@contextmanager
def open_store(
    owners: Iterable[DataOwner] = (),
    config: Config | None = None,
    store: StoreHandle | None = None,
    metrics: MetricsRegistry | None = None,
    raise_on_failure: bool = False,
) -> Generator[StoreSession, None, None]:
    """Own the store for the duration of a block.

    Applies the observability configuration (once per process), opens the
    configured store file, runs the bootstrap sequence and yields the report
    with the schema manager. The handle is closed exactly once when the
    block exits, whatever the outcome.

    Args:
        owners: Data owners to provision.
        config: Configuration (defaults to get_config()).
        store: Pre-built store handle; overrides the configured file.
        metrics: Metrics registry; defaults to the one set up from
            config.observability.
        raise_on_failure: Raise the report's exception instead of yielding
            a failed session.

    Example:
        with open_store([UserMeasurementTable()]) as session:
            if not session.report.ready:
                show_error(session.report.describe())
    """
    config = config or get_config()
    observed = setup_observability(config.observability)
    metrics = metrics or observed

    if store is None:
        config.ensure_directories()
        store = SQLiteStore.from_config(config.storage)

    sequencer = BootstrapSequencer(store, owners, metrics)
    try:
        report = sequencer.run()
        if raise_on_failure:
            report.raise_for_failure()
        schema = sequencer.schema if store.is_open else None
        yield StoreSession(report=report, schema=schema)
    finally:
        if store.is_open:
            store.close()
