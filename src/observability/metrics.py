"""
Prometheus metrics for the trending listing service.

Defines and exposes metrics for:
- Subjects scored, by momentum phase
- Ranking latency
- Ranking errors

The engine functions themselves stay metric-free; only the service
layer records here. Metrics are exposed via HTTP endpoint for
Prometheus scraping when a host process starts the server.
"""

import logging

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for latency histograms (in seconds)
LATENCY_BUCKETS = (0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)


class MetricsCollector:
    """
    Prometheus metrics collector for trending listings.

    Usage:
        metrics = MetricsCollector()
        metrics.start_server()

        metrics.record_ranking(phases=["hot", "stable"], latency=0.004)
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """Initialize Prometheus metrics on ``registry`` (default global)."""
        self._registry = registry or REGISTRY

        self.subjects_scored = Counter(
            "mention_trends_subjects_scored_total",
            "Total number of subjects scored",
            ["phase"],
            registry=self._registry,
        )

        self.rankings = Counter(
            "mention_trends_rankings_total",
            "Total number of trending listings produced",
            registry=self._registry,
        )

        self.ranking_errors = Counter(
            "mention_trends_ranking_errors_total",
            "Total failed trending listings",
            ["error_type"],
            registry=self._registry,
        )

        self.ranking_latency = Histogram(
            "mention_trends_ranking_latency_seconds",
            "Time to fetch, score and rank candidate subjects",
            buckets=LATENCY_BUCKETS,
            registry=self._registry,
        )

        self.last_candidates = Gauge(
            "mention_trends_last_candidates",
            "Candidate subjects considered by the most recent listing",
            registry=self._registry,
        )

        logger.info("Prometheus metrics initialized")

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus metrics HTTP server.

        Args:
            port: Port to expose metrics on (default from settings)
        """
        port = port or get_settings().metrics_port

        start_http_server(port, registry=self._registry)
        logger.info("Prometheus metrics server started on port %d", port)

    def record_ranking(self, phases: list[str], latency: float | None = None) -> None:
        """
        Record one trending listing.

        Args:
            phases: Phase of every scored candidate
            latency: Optional end-to-end latency in seconds
        """
        self.rankings.inc()
        self.last_candidates.set(len(phases))
        for phase in phases:
            self.subjects_scored.labels(phase=phase).inc()

        if latency is not None:
            self.ranking_latency.observe(latency)

    def record_error(self, error_type: str) -> None:
        """Record a failed listing."""
        self.ranking_errors.labels(error_type=error_type).inc()


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
