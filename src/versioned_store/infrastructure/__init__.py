"""Infrastructure layer - cross-cutting concerns."""

from versioned_store.infrastructure.config import (
    Config,
    ObservabilityConfig,
    StorageConfig,
    get_config,
)
from versioned_store.infrastructure.logging import (
    get_logger,
    setup_logging,
    setup_logging_from_config,
)
from versioned_store.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from versioned_store.infrastructure.observability import reset_observability, setup_observability
from versioned_store.infrastructure.tracing import get_tracer, setup_tracing, trace_span

__all__ = [
    "Config",
    "StorageConfig",
    "ObservabilityConfig",
    "get_config",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "setup_observability",
    "reset_observability",
]
