"""
Prometheus metrics for auction resolution.

Metric objects live in the default prometheus_client registry; the
MetricsCollector wraps the recording calls used by the engine.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    generate_latest,
    REGISTRY,
)
import time


# ============================================================================
# CORE METRICS
# ============================================================================

auctions_resolved_total = Counter(
    "proxy_auction_resolved_total",
    "Total number of auctions resolved",
    ["outcome"],  # 'winner' or 'no_bidders'
)

auction_failures_total = Counter(
    "proxy_auction_failures_total",
    "Total number of failed auction resolutions",
    ["error_type"],
)

auction_rounds = Histogram(
    "proxy_auction_rounds",
    "Bidding rounds needed to resolve an auction",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

auction_bidders = Histogram(
    "proxy_auction_bidders",
    "Number of bidders per auction",
    buckets=[1, 2, 5, 10, 25, 50, 100, 500, 1000],
)

auction_resolution_latency = Histogram(
    "proxy_auction_resolution_latency_seconds",
    "Time to resolve an auction",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

system_info = Info("proxy_auction_system", "System information")


# ============================================================================
# HELPERS
# ============================================================================


class MetricsContext:
    """
    Context manager for timing a block into a histogram.

    Example:
        with MetricsContext(auction_resolution_latency):
            engine.process_bids(bidders)
    """

    def __init__(self, histogram):
        self.histogram = histogram
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        self.histogram.observe(self.duration)
        return False


# ============================================================================
# METRICS COLLECTOR
# ============================================================================


class MetricsCollector:
    """
    Centralized metrics recording and export.
    """

    def __init__(self):
        self._update_system_info()

    def _update_system_info(self):
        """Update system information metric."""
        import platform

        system_info.info(
            {
                "version": "1.0.0",
                "platform": platform.system(),
                "python_version": platform.python_version(),
            }
        )

    def record_resolution(self, has_winner: bool, bidder_count: int, rounds: int):
        """Record a successfully resolved auction."""
        outcome = "winner" if has_winner else "no_bidders"
        auctions_resolved_total.labels(outcome=outcome).inc()
        auction_bidders.observe(bidder_count)
        auction_rounds.observe(rounds)

    def record_failure(self, error_type: str):
        """Record a failed resolution by error type."""
        auction_failures_total.labels(error_type=error_type).inc()

    def get_metrics(self) -> bytes:
        """
        Get metrics in Prometheus format.

        Returns:
            Metrics as bytes in Prometheus exposition format
        """
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()
