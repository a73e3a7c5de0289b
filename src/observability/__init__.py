"""
Observability module: tracing and metrics for auction resolution.

Provides OpenTelemetry tracing and Prometheus metrics.
"""

from .tracing import (
    setup_tracing,
    shutdown_tracing,
    create_span,
    get_tracer,
)
from .metrics import metrics_collector, MetricsCollector, MetricsContext

__all__ = [
    'setup_tracing',
    'shutdown_tracing',
    'create_span',
    'get_tracer',
    'metrics_collector',
    'MetricsCollector',
    'MetricsContext',
]
