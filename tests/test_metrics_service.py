"""Tests for the metrics collector."""

from drawkit.models.errors import ErrorCode
from drawkit.models.metrics import GenerationMetrics
from drawkit.services.metrics_service import MetricsService


def _metrics(duration_ms: int, retry_count: int = 0, error_code: ErrorCode | None = None) -> GenerationMetrics:
    return GenerationMetrics(
        provider="gemini",
        duration_ms=duration_ms,
        model_used="gemini-3-pro-image-preview",
        retry_count=retry_count,
        error_code=error_code,
    )


def test_empty_summary():
    summary = MetricsService().summary()

    assert summary["count"] == 0
    assert summary["avg_duration_ms"] == 0
    assert summary["errors"] == {}


def test_summary_aggregates_calls():
    service = MetricsService()
    service.record(_metrics(1000))
    service.record(_metrics(3000, retry_count=3, error_code=ErrorCode.PROVIDER_OVERLOADED))
    service.record(_metrics(2000, retry_count=1, error_code=ErrorCode.PROVIDER_OVERLOADED))

    summary = service.summary()

    assert summary["count"] == 3
    assert summary["failures"] == 2
    assert summary["total_duration_ms"] == 6000
    assert summary["avg_duration_ms"] == 2000
    assert summary["total_retries"] == 4
    assert summary["errors"] == {"PROVIDER_OVERLOADED": 2}


def test_get_all_returns_copy_and_clear():
    service = MetricsService()
    service.record(_metrics(10))

    snapshot = service.get_all()
    snapshot.clear()

    assert len(service.get_all()) == 1
    service.clear()
    assert service.get_all() == []
