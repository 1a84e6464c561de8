"""Prometheus metrics for the versioned store."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all versioned store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Statement metrics
        self.statements_total = Counter(
            "store_statements_total",
            "Total number of SQL statements executed",
            ["statement_type", "status"],  # status: success, error
            registry=self._registry,
        )

        self.statement_latency_seconds = Histogram(
            "store_statement_latency_seconds",
            "Statement latency in seconds",
            ["statement_type"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

        # Table lifecycle metrics
        self.tables_created_total = Counter(
            "store_tables_created_total",
            "Total number of managed tables created",
            registry=self._registry,
        )

        self.tables_dropped_total = Counter(
            "store_tables_dropped_total",
            "Total number of managed tables dropped",
            registry=self._registry,
        )

        # Version bookkeeping metrics
        self.version_writes_total = Counter(
            "store_version_writes_total",
            "Total version records written to the bookkeeping table",
            ["status"],
            registry=self._registry,
        )

        # Bootstrap metrics
        self.bootstrap_total = Counter(
            "store_bootstrap_total",
            "Bootstrap sequences by terminal state",
            ["state"],  # ready, failed
            registry=self._registry,
        )

        self.provisioning_failures_total = Counter(
            "store_provisioning_failures_total",
            "Data owners that failed to provision their table",
            ["table"],
            registry=self._registry,
        )

        # Store info
        self.info = Info(
            "versioned_store",
            "Versioned store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(
    port: int | None = None, registry: CollectorRegistry | None = None
) -> MetricsRegistry:
    """
    Set up the metrics registry.

    Args:
        port: Port for the Prometheus HTTP exporter; no exporter is started if None
        registry: Optional custom registry; without one, the existing
            process-wide registry is reused

    Returns:
        The metrics registry
    """
    global _metrics
    if registry is not None or _metrics is None:
        _metrics = MetricsRegistry(registry)

    from versioned_store import __version__
    _metrics.info.info({
        "version": __version__,
    })

    if port is not None:
        start_http_server(port, registry=_metrics.registry)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
