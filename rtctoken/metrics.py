"""
rtctoken Metrics.

Provides Prometheus-compatible metrics for monitoring token issuance,
build latency, and failure rates.
"""

import time
import logging
import threading
from contextlib import contextmanager
from typing import Optional, Dict, Any

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

logger = logging.getLogger(__name__)


class TokenMetrics:
    """
    Metrics collector for token builds.

    Keeps a simple in-memory store alongside Prometheus metrics registered
    on a private registry, so several collectors can coexist in one process.

    Example:
        >>> metrics = TokenMetrics()
        >>> builder = TokenBuilder(credential, metrics=metrics)
        >>> token = builder.build_media_token("room1", "user42", 86400)  # records itself
        >>>
        >>> # Recording directly, outside the builder
        >>> metrics.record_token_issued("media")
        >>> metrics.record_failure("crypto")
        >>> print(metrics.get_stats())
    """

    def __init__(self, namespace: str = "rtctoken", registry: Optional[CollectorRegistry] = None):
        """
        Initialize metrics collector.

        Args:
            namespace: Metric name prefix.
            registry: Optional Prometheus registry (a fresh one if None).
        """
        self._namespace = namespace
        self._lock = threading.Lock()
        self._registry = registry or CollectorRegistry()

        # Simple in-memory stats
        self._counters: Dict[str, float] = {}
        # running aggregates; the Histogram keeps the distribution
        self._duration_count = 0
        self._duration_sum = 0.0
        self._duration_max = 0.0

        self._prom_metrics = {
            "tokens_issued": Counter(
                f"{namespace}_tokens_issued_total",
                "Total number of tokens issued",
                ["kind"],
                registry=self._registry,
            ),
            "token_failures": Counter(
                f"{namespace}_token_failures_total",
                "Total number of failed token builds",
                ["reason"],
                registry=self._registry,
            ),
            "build_duration": Histogram(
                f"{namespace}_build_duration_seconds",
                "Token build latency in seconds",
                buckets=(0.00005, 0.0001, 0.00025, 0.0005, 0.001, 0.005, 0.01),
                registry=self._registry,
            ),
        }

    def record_token_issued(self, kind: str) -> None:
        """Record a successfully issued token of the given kind."""
        with self._lock:
            key = f"tokens_issued_{kind}"
            self._counters[key] = self._counters.get(key, 0) + 1
        self._prom_metrics["tokens_issued"].labels(kind=kind).inc()

    def record_failure(self, reason: str) -> None:
        """Record a failed build (invalid_credential, crypto)."""
        with self._lock:
            key = f"failures_{reason}"
            self._counters[key] = self._counters.get(key, 0) + 1
        self._prom_metrics["token_failures"].labels(reason=reason).inc()

    def record_build_duration(self, duration_seconds: float) -> None:
        with self._lock:
            self._duration_count += 1
            self._duration_sum += duration_seconds
            self._duration_max = max(self._duration_max, duration_seconds)
        self._prom_metrics["build_duration"].observe(duration_seconds)

    @contextmanager
    def build_timer(self):
        """Context manager for timing token builds."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_build_duration(time.perf_counter() - start)

    def get_stats(self) -> Dict[str, Any]:
        """Get current metrics as a dictionary."""
        with self._lock:
            stats = dict(self._counters)
            if self._duration_count:
                stats["build_duration_avg"] = self._duration_sum / self._duration_count
                stats["build_duration_count"] = self._duration_count
                stats["build_duration_max"] = self._duration_max

            issued = sum(v for k, v in stats.items() if k.startswith("tokens_issued_"))
            stats["tokens_issued"] = issued
            return stats

    def get_prometheus_metrics(self) -> bytes:
        """Get metrics in Prometheus text format."""
        return generate_latest(self._registry)


# Global metrics instance
_global_metrics: Optional[TokenMetrics] = None


def get_metrics() -> TokenMetrics:
    """Get or create the global metrics instance."""
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = TokenMetrics()
        logger.debug("Created global token metrics collector")
    return _global_metrics
