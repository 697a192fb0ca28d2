#!/usr/bin/env python3
"""
Metrics Collector with Prometheus Integration

Cache-centric metrics:
- Hit/miss counts per tier (local, shared)
- Shared cache failures by operation (each one a silent degradation)
- Fetch outcomes on cache miss
- Single-flight joins (fetches avoided)
- Read-through middleware results
- Random selection index size

Architectural Decision: prometheus-client for industry-standard metrics
- Compatible with Grafana dashboards
- Scraped from GET /admin/metrics

Author: System Architect
Date: 2026-10-02
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Info,
    generate_latest,
)

from content_cache.core.config.settings import get_settings
from content_cache.core.logging.logger import get_logger

logger = get_logger(__name__)


# ============================================================================
# Metric Definitions
# ============================================================================

CACHE_HITS = Counter(
    'content_cache_hits_total',
    'Total cache hits',
    ['tier']  # local or shared
)

CACHE_MISSES = Counter(
    'content_cache_misses_total',
    'Total cache misses',
    ['tier']
)

SHARED_CACHE_ERRORS = Counter(
    'content_cache_shared_errors_total',
    'Shared cache operations that failed and were treated as absent',
    ['operation']
)

FETCHES = Counter(
    'content_cache_fetch_total',
    'Fallback computations run on cache miss',
    ['outcome']  # success or failure
)

SINGLE_FLIGHT_JOINS = Counter(
    'content_cache_single_flight_joins_total',
    'Callers that joined an in-flight fetch instead of starting one'
)

HTTP_RESPONSE_CACHE = Counter(
    'content_cache_http_responses_total',
    'Read-through middleware results',
    ['result']  # hit, miss, stored, skipped
)

INDEX_SIZE = Gauge(
    'content_cache_index_size',
    'Entries held by the random selection index'
)

ERRORS = Counter(
    'content_cache_errors_total',
    'Total errors by type',
    ['error_type', 'stage']
)

APP_INFO = Info(
    'content_cache_app',
    'Application information'
)


class MetricsCollector:
    """
    Thin wrapper over the module-level Prometheus metrics.

    Usage:
        metrics = get_metrics_collector()
        metrics.record_cache_hit("local")
        output = metrics.get_prometheus_metrics()
    """

    def __init__(self):
        settings = get_settings()

        APP_INFO.info({
            'version': settings.app.APP_VERSION,
            'environment': settings.app.ENVIRONMENT,
            'app_name': settings.app.APP_NAME
        })

        logger.info("Metrics collector initialized")

    # =========================================================================
    # Cache Metrics
    # =========================================================================

    def record_cache_hit(self, tier: str) -> None:
        """Record cache hit."""
        CACHE_HITS.labels(tier=tier).inc()

    def record_cache_miss(self, tier: str) -> None:
        """Record cache miss."""
        CACHE_MISSES.labels(tier=tier).inc()

    def record_shared_error(self, operation: str) -> None:
        """Record a swallowed shared cache failure."""
        SHARED_CACHE_ERRORS.labels(operation=operation).inc()

    def record_fetch(self, outcome: str) -> None:
        """Record a fallback computation outcome."""
        FETCHES.labels(outcome=outcome).inc()

    def record_single_flight_join(self) -> None:
        SINGLE_FLIGHT_JOINS.inc()

    def record_http_cache(self, result: str) -> None:
        HTTP_RESPONSE_CACHE.labels(result=result).inc()

    def set_index_size(self, size: int) -> None:
        INDEX_SIZE.set(size)

    # =========================================================================
    # Error Metrics
    # =========================================================================

    def record_error(self, error_type: str, stage: str) -> None:
        """Record error."""
        ERRORS.labels(error_type=error_type, stage=stage).inc()

    # =========================================================================
    # Export
    # =========================================================================

    def get_prometheus_metrics(self) -> bytes:
        """
        Get Prometheus metrics output.

        Returns:
            bytes: Prometheus text format metrics
        """
        return generate_latest(REGISTRY)

    def get_content_type(self) -> str:
        """Get Prometheus content type."""
        return CONTENT_TYPE_LATEST


# Global metrics collector
_metrics: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
