"""Metrics service for tracking generation calls."""

import logging
from collections import Counter
from typing import Any

from drawkit.models.metrics import GenerationMetrics

logger = logging.getLogger(__name__)


class MetricsService:
    """
    In-process collector of GenerationMetrics.

    Inject one into a provider to keep a record of every call, successful or not.
    """

    def __init__(self):
        self._metrics: list[GenerationMetrics] = []

    def record(self, metrics: GenerationMetrics) -> None:
        self._metrics.append(metrics)
        status = "ok" if metrics.succeeded else metrics.error_code.value
        logger.debug(
            f"📊 [MetricsService] {metrics.provider}/{metrics.model_used or 'unknown'}: "
            f"{status}, duration={metrics.duration_ms}ms, retries={metrics.retry_count}"
        )

    def get_all(self) -> list[GenerationMetrics]:
        """Get all recorded metrics."""
        return self._metrics.copy()

    def clear(self) -> None:
        self._metrics.clear()

    def summary(self) -> dict[str, Any]:
        """Aggregate counts, failures, durations and retries."""
        if not self._metrics:
            return {
                "count": 0,
                "failures": 0,
                "total_duration_ms": 0,
                "avg_duration_ms": 0,
                "total_retries": 0,
                "errors": {},
            }

        total_duration = sum(m.duration_ms for m in self._metrics)
        failures = [m for m in self._metrics if not m.succeeded]

        return {
            "count": len(self._metrics),
            "failures": len(failures),
            "total_duration_ms": total_duration,
            "avg_duration_ms": total_duration / len(self._metrics),
            "total_retries": sum(m.retry_count for m in self._metrics),
            "errors": dict(Counter(m.error_code.value for m in failures)),
        }
