"""Query Executor: runs single raw statements against the shared store.

All SQL issued by the versioned store funnels through this module. The
executor never raises on a failed statement: the failure is returned as
an ExecutionResult and the caller decides whether it is fatal.

Statements:
    - Exactly one statement per call (no multi-statement batching).
    - Values are bound as "?" parameters, never interpolated.
    - No implicit transaction: the store runs in autocommit mode.
"""

from __future__ import annotations

import sqlite3
import time
from typing import Any, Sequence

from versioned_store.domain.entities import ExecutionResult, Row
from versioned_store.infrastructure.logging import get_logger
from versioned_store.infrastructure.metrics import MetricsRegistry, get_metrics
from versioned_store.ports.outbound import StoreClosedError, StoreHandle

logger = get_logger(__name__)


def statement_type(sql: str) -> str:
    """Return the leading keyword of a statement, lowercased (e.g. "create")."""
    words = sql.split(None, 1)
    return words[0].lower() if words else "empty"


class QueryExecutor:
    """Executes raw statements on a borrowed store handle.

    The executor does not own the handle and never opens or closes it.
    """

    def __init__(
        self,
        store: StoreHandle,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._store = store
        self._metrics = metrics or get_metrics()

    @property
    def store(self) -> StoreHandle:
        return self._store

    def execute(self, sql: str, params: Sequence[Any] = ()) -> ExecutionResult:
        """Execute a single statement.

        Args:
            sql: The statement to execute.
            params: Values bound to "?" placeholders.

        Returns:
            ExecutionResult with rows (for queries) and the affected row
            count; a failed result if the statement could not be prepared
            or run.
        """
        kind = statement_type(sql)
        if kind == "empty":
            return ExecutionResult.error("Empty statement")

        start = time.perf_counter()
        try:
            cursor = self._store.connection.execute(sql, tuple(params))
            columns = [d[0] for d in cursor.description] if cursor.description else []
            rows = [Row(columns, list(values)) for values in cursor.fetchall()]
            affected = cursor.rowcount if cursor.rowcount > 0 else 0
        except (sqlite3.Error, sqlite3.Warning, OverflowError, StoreClosedError) as e:
            # sqlite3.Warning: multi-statement strings on Python < 3.12
            # OverflowError: an int parameter outside the 64-bit INTEGER range
            self._metrics.statements_total.labels(statement_type=kind, status="error").inc()
            logger.warning("statement_failed", statement_type=kind, sql=sql, error=str(e))
            return ExecutionResult.error(str(e))
        finally:
            self._metrics.statement_latency_seconds.labels(statement_type=kind).observe(
                time.perf_counter() - start
            )

        self._metrics.statements_total.labels(statement_type=kind, status="success").inc()
        logger.debug("statement_executed", statement_type=kind, rows=len(rows), affected=affected)
        return ExecutionResult(rows=rows, columns=columns, affected_rows=affected, message="OK")

    def query(self, sql: str, params: Sequence[Any] = ()) -> ExecutionResult:
        """Execute a read statement; same contract as execute()."""
        return self.execute(sql, params)
