"""Prometheus-backed metrics sink.

Counters are registered lazily, the first time a name is incremented, so
callers only ever deal in metric names.
"""

import logging

from prometheus_client import REGISTRY, CollectorRegistry, Counter

logger = logging.getLogger(__name__)


class PrometheusMetricsSink:
    """Fire-and-forget counter sink over a Prometheus registry."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.registry = registry
        self._counters: dict[str, Counter] = {}

    def increment_counter(self, name: str) -> None:
        """Increment the named counter. Failures are logged, never raised."""
        try:
            self._counter(name).inc()
        except Exception:
            logger.warning(f"Failed to increment counter {name}", exc_info=True)

    def _counter(self, name: str) -> Counter:
        counter = self._counters.get(name)
        if counter is None:
            counter = Counter(name, f"Total count of {name}", registry=self.registry)
            self._counters[name] = counter
        return counter
