import os
from typing import Any, Dict, List, Optional

import psutil
from fastapi import APIRouter, Body, HTTPException, Response, status
from prometheus_client import Counter, Gauge
from pydantic import BaseModel, Field

from perfboard.config import config, logger
from perfboard.health import latency_monitor
from perfboard.logging import event_logger
from perfboard.metrics import evaluation
from perfboard.results.compare import compare_runs
from perfboard.results.formatters import FORMATTERS, format_metric
from perfboard.results.rows import build_result_row
from perfboard.results.timeseries import prepare_chart_data
from perfboard.results.verdict import Verdict, evaluate

router = APIRouter()

# Prometheus Metrics
REQUEST_COUNT = Counter("http_requests_total", "Total count of HTTP requests", ["method", "endpoint"])
SERVICE_READY_STATUS = Gauge("service_ready_status", "Current readiness status (1 for ready, 0 for not ready)")
MEMORY_USAGE_BYTES = Gauge("memory_usage_bytes", "Current memory usage in bytes")


class BatchRequest(BaseModel):
    items: List[Dict[str, Any]]


class CompareRequest(BaseModel):
    sub_type: str
    summary_a: Dict[str, Any] = Field(default_factory=dict)
    summary_b: Dict[str, Any] = Field(default_factory=dict)
    sub_type_b: Optional[str] = None


class ChartRequest(BaseModel):
    series_a: List[Any] = Field(default_factory=list)
    series_b: List[Any] = Field(default_factory=list)
    interval_ms: Optional[int] = Field(default=None, gt=0)


class RowRequest(BaseModel):
    sub_type: str
    summary: Dict[str, Any] = Field(default_factory=dict)


@router.get("/health")
def health():
    """
    Returns service health status.
    Always returns 200 unless the app is completely broken.
    """
    REQUEST_COUNT.labels(method="GET", endpoint="/health").inc()
    return {"status": "healthy"}

@router.get("/ready")
def ready(response: Response):
    """
    Returns readiness status.

    Fails (503) if:
    - Memory usage is above threshold
    - Our own request latency (p95) is too high
    """
    REQUEST_COUNT.labels(method="GET", endpoint="/ready").inc()

    is_ready = True
    reason = "ready"

    process = psutil.Process(os.getpid())
    mem_info = process.memory_info()
    usage_mb = mem_info.rss / (1024 * 1024)
    MEMORY_USAGE_BYTES.set(mem_info.rss)

    if usage_mb > config.MAX_MEMORY_MB_READY:
        is_ready = False
        reason = f"Memory usage too high: {usage_mb:.2f}MB"

    p95 = latency_monitor.get_p95_latency()
    if not latency_monitor.is_latency_acceptable(config.MAX_LATENCY_MS):
        is_ready = False
        reason = f"High latency: p95={p95:.2f}ms > {config.MAX_LATENCY_MS}ms"

    body = {
        "status": "ready" if is_ready else "not ready",
        "p95_ms": round(p95, 2),
        "p95_band": latency_monitor.get_p95_band().value,
    }
    if is_ready:
        SERVICE_READY_STATUS.set(1)
        return body

    SERVICE_READY_STATUS.set(0)
    logger.warning(f"Readiness probe failed: {reason}")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    body["reason"] = reason
    return body

@router.post("/results/verdict")
def verdict(container: Dict[str, Any] = Body(...)):
    """
    Grade one test result container as Passed, Warning or Failed.
    The summary may sit at summary, testRun.summary or testRun.rawSummary.
    """
    REQUEST_COUNT.labels(method="POST", endpoint="/results/verdict").inc()
    result, elapsed_ms = evaluation.timed_evaluation(evaluate, container)
    event_logger.log_verdict_evaluated(result.label.value, elapsed_ms)
    return result.to_dict()

@router.post("/results/verdict/batch")
def verdict_batch(request: BatchRequest):
    REQUEST_COUNT.labels(method="POST", endpoint="/results/verdict/batch").inc()
    if len(request.items) > config.MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Batch of {len(request.items)} exceeds limit of {config.MAX_BATCH_SIZE}"
        )

    counts = {label.value: 0 for label in Verdict}
    results = []
    for container in request.items:
        result, _ = evaluation.timed_evaluation(evaluate, container)
        counts[result.label.value] += 1
        results.append(result.to_dict())

    event_logger.log_batch_evaluated(counts, len(results))
    return {"results": results, "counts": counts}

@router.post("/results/row")
def result_row(request: RowRequest):
    """
    Formatted history-table cells (latency, rate, verdict) for one run.
    """
    REQUEST_COUNT.labels(method="POST", endpoint="/results/row").inc()
    try:
        return build_result_row(request.sub_type, request.summary)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/results/format/{kind}")
def format_value(kind: str, value: Optional[float] = None):
    REQUEST_COUNT.labels(method="GET", endpoint="/results/format").inc()
    if kind not in FORMATTERS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown metric kind '{kind}'. Available: {', '.join(sorted(FORMATTERS))}"
        )
    return format_metric(kind, value).to_dict()

@router.post("/results/compare")
def compare(request: CompareRequest):
    """
    Compare run B against run A. Both runs must come from the same engine.
    """
    REQUEST_COUNT.labels(method="POST", endpoint="/results/compare").inc()
    try:
        comparison = compare_runs(request.sub_type, request.summary_a, request.summary_b, request.sub_type_b)
    except ValueError as e:
        event_logger.log_comparison_rejected(str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    evaluation.record_comparison(comparison.sub_type)
    payload = comparison.to_dict()
    event_logger.log_runs_compared(comparison.sub_type, payload["score"])
    return payload

@router.post("/results/chart")
def chart(request: ChartRequest):
    REQUEST_COUNT.labels(method="POST", endpoint="/results/chart").inc()
    interval = request.interval_ms or config.CHART_POINT_INTERVAL_MS
    points = prepare_chart_data(request.series_a, request.series_b, interval_ms=interval)
    evaluation.record_chart_points(len(points))
    return {"points": [point.to_dict() for point in points]}
