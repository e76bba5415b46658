import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

"""
Summary Extraction

Each execution engine writes a differently shaped summary:

    postman  duration_ms, error_rate.value, failures, passes
    quick    http_req_duration_p95.value, http_reqs.value, http_req_failed.fails
    script   metrics_overview.http_req_duration["p(95)"],
             metrics_overview.http_req_failed.value

Nothing is validated upstream. Every lookup goes through dig(), which returns
None instead of raising when a key is missing or a level is not a mapping.
"""

SUMMARY_PATHS = (
    ("summary",),
    ("testRun", "summary"),
    ("testRun", "rawSummary"),
)


def dig(data: Any, *path: str) -> Any:
    """
    Walk nested mappings along path. Missing keys and non-mapping levels give None.
    """
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def as_number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a metric
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # Huge JSON ints overflow float(); inf cannot be serialized back out
    try:
        if not math.isfinite(float(value)):
            return None
    except OverflowError:
        return None
    return value


def dig_number(data: Any, *path: str) -> Optional[float]:
    return as_number(dig(data, *path))


def locate_summary(container: Any) -> Mapping:
    """
    Find the summary inside a test result container.

    Tries container.summary, container.testRun.summary and
    container.testRun.rawSummary in that order and returns the first one found,
    or an empty dict.
    """
    for path in SUMMARY_PATHS:
        found = dig(container, *path)
        if found is not None:
            return found if isinstance(found, Mapping) else {}
    return {}


@dataclass(frozen=True)
class PostmanMetrics:
    duration_ms: Optional[float] = None
    error_rate: Optional[float] = None
    failures: Optional[float] = None
    passes: Optional[float] = None

    @property
    def fail_rate(self) -> Optional[float]:
        if self.failures is None or self.passes is None:
            return None
        total = self.failures + self.passes
        if total <= 0:
            return None
        return self.failures / total * 100


@dataclass(frozen=True)
class QuickMetrics:
    p95_ms: Optional[float] = None
    total_requests: Optional[float] = None
    failed_requests: Optional[float] = None

    @property
    def error_rate(self) -> Optional[float]:
        total = self.total_requests or 0
        if total <= 0:
            return None
        return (self.failed_requests or 0) / total * 100


@dataclass(frozen=True)
class ScriptMetrics:
    p95_ms: Optional[float] = None
    avg_ms: Optional[float] = None
    failed_fraction: Optional[float] = None

    @property
    def error_rate(self) -> Optional[float]:
        # Truthiness check: a fraction of exactly 0 is reported as missing.
        if not self.failed_fraction:
            return None
        return self.failed_fraction * 100


@dataclass(frozen=True)
class SummaryMetrics:
    postman: PostmanMetrics
    quick: QuickMetrics
    script: ScriptMetrics


def extract_postman(summary: Mapping) -> PostmanMetrics:
    return PostmanMetrics(
        duration_ms=dig_number(summary, "duration_ms"),
        error_rate=dig_number(summary, "error_rate", "value"),
        failures=dig_number(summary, "failures"),
        passes=dig_number(summary, "passes"),
    )


def extract_quick(summary: Mapping) -> QuickMetrics:
    return QuickMetrics(
        p95_ms=dig_number(summary, "http_req_duration_p95", "value"),
        total_requests=dig_number(summary, "http_reqs", "value"),
        failed_requests=dig_number(summary, "http_req_failed", "fails"),
    )


def extract_script(summary: Mapping) -> ScriptMetrics:
    return ScriptMetrics(
        p95_ms=dig_number(summary, "metrics_overview", "http_req_duration", "p(95)"),
        avg_ms=dig_number(summary, "metrics_overview", "http_req_duration", "avg"),
        failed_fraction=dig_number(summary, "metrics_overview", "http_req_failed", "value"),
    )


def extract_metrics(summary: Mapping) -> SummaryMetrics:
    """
    Run every sub-type extractor over the same summary.

    Fields belonging to other engines are simply None, so callers can union
    the three views without knowing which engine produced the summary.
    """
    return SummaryMetrics(
        postman=extract_postman(summary),
        quick=extract_quick(summary),
        script=extract_script(summary),
    )
