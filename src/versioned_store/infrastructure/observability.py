"""One-shot wiring of logging, metrics and tracing from configuration."""

from __future__ import annotations

from versioned_store.infrastructure.config import ObservabilityConfig
from versioned_store.infrastructure.logging import get_logger, setup_logging_from_config
from versioned_store.infrastructure.metrics import MetricsRegistry, setup_metrics
from versioned_store.infrastructure.tracing import setup_tracing

logger = get_logger(__name__)

_metrics: MetricsRegistry | None = None


def setup_observability(config: ObservabilityConfig) -> MetricsRegistry:
    """
    Apply the observability section of the configuration.

    Runs once per process; later calls return the registry set up by the
    first one. The Prometheus exporter starts only when metrics_port is set
    and traces are exported only when otel_endpoint is set.

    Args:
        config: Observability configuration

    Returns:
        The process-wide metrics registry
    """
    global _metrics
    if _metrics is not None:
        return _metrics

    setup_logging_from_config(config)
    metrics = setup_metrics(port=config.metrics_port)
    if config.otel_endpoint:
        setup_tracing(service_name=config.otel_service_name, otlp_endpoint=config.otel_endpoint)

    _metrics = metrics
    logger.info(
        "observability_configured",
        log_level=config.log_level,
        metrics_port=config.metrics_port,
        otel_endpoint=config.otel_endpoint,
    )
    return metrics


def reset_observability() -> None:
    """Forget the previous setup so the next call applies again (for tests)."""
    global _metrics
    _metrics = None
