from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from perfboard.results.summary import SummaryMetrics, extract_metrics, locate_summary

# Substituted for missing metrics so they never satisfy a "greater than" rule
MISSING = -1

ERROR_RATE_FAIL_PERCENT = 5
FAIL_RATE_FAIL_PERCENT = 20
DURATION_WARN_MS = 3000
P95_WARN_MS = 200


class Verdict(str, Enum):
    PASSED = "Passed"
    WARNING = "Warning"
    FAILED = "Failed"

    @property
    def color(self) -> str:
        return VERDICT_COLORS[self]


VERDICT_COLORS = {
    Verdict.PASSED: "bg-green-100 text-green-600 rounded-full",
    Verdict.WARNING: "bg-yellow-100 text-yellow-700 rounded-full",
    Verdict.FAILED: "bg-red-100 text-red-600 rounded-full",
}


@dataclass(frozen=True)
class VerdictResult:
    label: Verdict
    color: str

    def to_dict(self):
        return {"label": self.label.value, "color": self.color}


def _or_missing(value: Optional[float]) -> float:
    return MISSING if value is None else value


def _is_failed(metrics: SummaryMetrics) -> bool:
    error_rates = (
        metrics.postman.error_rate,
        metrics.quick.error_rate,
        metrics.script.error_rate,
    )
    if any(_or_missing(rate) > ERROR_RATE_FAIL_PERCENT for rate in error_rates):
        return True
    return _or_missing(metrics.postman.fail_rate) >= FAIL_RATE_FAIL_PERCENT


def _is_warning(metrics: SummaryMetrics) -> bool:
    if _or_missing(metrics.postman.duration_ms) > DURATION_WARN_MS:
        return True
    if _or_missing(metrics.quick.p95_ms) > P95_WARN_MS:
        return True
    if _or_missing(metrics.script.p95_ms) > P95_WARN_MS:
        return True

    error_rates = (
        metrics.postman.error_rate,
        metrics.quick.error_rate,
        metrics.script.error_rate,
    )
    for rate in error_rates:
        if 0 < _or_missing(rate) <= ERROR_RATE_FAIL_PERCENT:
            return True

    return 0 < _or_missing(metrics.postman.fail_rate) < FAIL_RATE_FAIL_PERCENT


def classify_metrics(metrics: SummaryMetrics) -> Verdict:
    if _is_failed(metrics):
        return Verdict.FAILED
    if _is_warning(metrics):
        return Verdict.WARNING
    return Verdict.PASSED


def evaluate(container: Any) -> VerdictResult:
    """
    Compute the Passed / Warning / Failed badge for a test result.

    The container may hold the summary directly or under testRun.summary /
    testRun.rawSummary. Whatever fields are present drive the verdict; fields
    from other engines stay None and never trip a rule. A container with no
    usable metrics at all comes out as Passed.
    """
    metrics = extract_metrics(locate_summary(container))
    label = classify_metrics(metrics)
    return VerdictResult(label=label, color=label.color)
