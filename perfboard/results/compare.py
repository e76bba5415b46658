from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from perfboard.results.summary import dig_number, extract_script

"""
Run Comparison

Two runs of the same engine are compared metric by metric. Every metric has a
direction saying which way is an improvement, so a comparison can be scored as
the share of changed metrics that moved the right way.
"""


class Direction(str, Enum):
    LOWER = "lower"
    HIGHER = "higher"
    NEUTRAL = "neutral"


METRIC_DIRECTIONS = {
    "p95Duration": Direction.LOWER,
    "avgDuration": Direction.LOWER,
    "errorRate": Direction.LOWER,
    "requests": Direction.NEUTRAL,
    "duration": Direction.LOWER,
    "failAssertions": Direction.LOWER,
    "passAssertions": Direction.HIGHER,
}


@dataclass(frozen=True)
class MetricDiff:
    test_a: Optional[float]
    test_b: Optional[float]
    direction: Direction = Direction.NEUTRAL

    @property
    def diff(self) -> Optional[float]:
        if self.test_a is None or self.test_b is None:
            return None
        return self.test_b - self.test_a

    @property
    def trend(self) -> str:
        diff = self.diff
        if diff is None:
            return "unknown"
        if diff > 0:
            return "increase"
        if diff < 0:
            return "decrease"
        return "same"

    @property
    def improved(self) -> Optional[bool]:
        """
        True when B is better than A, False when worse, None when unchanged,
        unknown or neutral.
        """
        diff = self.diff
        if diff is None or diff == 0 or self.direction is Direction.NEUTRAL:
            return None
        if self.direction is Direction.LOWER:
            return diff < 0
        return diff > 0

    def to_dict(self):
        return {
            "testA": self.test_a,
            "testB": self.test_b,
            "diff": self.diff,
            "trend": self.trend,
            "betterWhen": self.direction.value,
        }


@dataclass(frozen=True)
class Checks:
    passes: float = 0
    failures: float = 0

    def to_dict(self):
        return {"pass": self.passes, "fail": self.failures}


@dataclass
class Comparison:
    sub_type: str
    metrics: Dict[str, MetricDiff] = field(default_factory=dict)
    checks_a: Checks = field(default_factory=Checks)
    checks_b: Checks = field(default_factory=Checks)

    def performance_score(self) -> Optional[Dict[str, float]]:
        improvements = 0
        regressions = 0
        for metric in self.metrics.values():
            improved = metric.improved
            if improved is True:
                improvements += 1
            elif improved is False:
                regressions += 1

        total = improvements + regressions
        if total == 0:
            return None
        return {
            "score": improvements / total * 100,
            "improvements": improvements,
            "regressions": regressions,
            "total": total,
        }

    def to_dict(self):
        payload: Dict[str, Any] = {key: metric.to_dict() for key, metric in self.metrics.items()}
        payload["checks"] = {"testA": self.checks_a.to_dict(), "testB": self.checks_b.to_dict()}
        payload["score"] = self.performance_score()
        payload["sub_type"] = self.sub_type
        return payload


def _percent(value: Optional[float]) -> Optional[float]:
    return None if value is None else value * 100


def _quick_metrics(summary: Mapping) -> Dict[str, Optional[float]]:
    return {
        "p95Duration": dig_number(summary, "http_req_duration_p95", "value"),
        "errorRate": dig_number(summary, "error_rate", "value"),
        "requests": dig_number(summary, "http_reqs", "value"),
    }


def _postman_metrics(summary: Mapping) -> Dict[str, Optional[float]]:
    return {
        "duration": dig_number(summary, "duration_ms"),
        "failAssertions": dig_number(summary, "failures"),
        "passAssertions": dig_number(summary, "passes"),
    }


def _script_metrics(summary: Mapping) -> Dict[str, Optional[float]]:
    script = extract_script(summary)
    return {
        "p95Duration": script.p95_ms,
        "avgDuration": script.avg_ms,
        "errorRate": _percent(script.failed_fraction),
    }


def _nested_checks(summary: Mapping) -> Checks:
    return Checks(
        passes=dig_number(summary, "passes", "value") or 0,
        failures=dig_number(summary, "failures", "value") or 0,
    )


def _flat_checks(summary: Mapping) -> Checks:
    return Checks(
        passes=dig_number(summary, "passes") or 0,
        failures=dig_number(summary, "failures") or 0,
    )


COMPARE_EXTRACTORS = {
    "quick": (_quick_metrics, _nested_checks),
    "postman": (_postman_metrics, _flat_checks),
    "script": (_script_metrics, _nested_checks),
}


def compare_runs(sub_type: str, summary_a: Any, summary_b: Any, sub_type_b: Optional[str] = None) -> Comparison:
    """
    Compare run B against run A.

    Both runs must come from the same engine. Positive diffs mean B is larger.
    """
    if sub_type_b is not None and sub_type_b != sub_type:
        raise ValueError(f"Cannot compare a '{sub_type}' run with a '{sub_type_b}' run")
    if sub_type not in COMPARE_EXTRACTORS:
        raise ValueError(f"Unknown sub-type '{sub_type}'")

    summary_a = summary_a if isinstance(summary_a, Mapping) else {}
    summary_b = summary_b if isinstance(summary_b, Mapping) else {}

    extract, checks = COMPARE_EXTRACTORS[sub_type]
    values_a = extract(summary_a)
    values_b = extract(summary_b)

    metrics = {
        key: MetricDiff(test_a=values_a[key], test_b=values_b[key], direction=METRIC_DIRECTIONS[key])
        for key in values_a
    }
    return Comparison(
        sub_type=sub_type,
        metrics=metrics,
        checks_a=checks(summary_a),
        checks_b=checks(summary_b),
    )
