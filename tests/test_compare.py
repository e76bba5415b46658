import pytest

from perfboard.results.compare import Direction, MetricDiff, compare_runs


def test_quick_comparison():
    a = {
        "http_req_duration_p95": {"value": 300},
        "error_rate": {"value": 2},
        "http_reqs": {"value": 1000},
        "passes": {"value": 98},
        "failures": {"value": 2},
    }
    b = {
        "http_req_duration_p95": {"value": 250},
        "error_rate": {"value": 3},
        "http_reqs": {"value": 1200},
    }
    comparison = compare_runs("quick", a, b)
    payload = comparison.to_dict()

    assert payload["p95Duration"] == {
        "testA": 300,
        "testB": 250,
        "diff": -50,
        "trend": "decrease",
        "betterWhen": "lower",
    }
    assert payload["errorRate"]["diff"] == 1
    assert payload["requests"]["trend"] == "increase"
    assert payload["checks"] == {
        "testA": {"pass": 98, "fail": 2},
        "testB": {"pass": 0, "fail": 0},
    }
    # p95 improved, error rate regressed, request count is neutral
    assert payload["score"] == {"score": 50.0, "improvements": 1, "regressions": 1, "total": 2}


def test_postman_comparison_uses_flat_fields():
    a = {"duration_ms": 4000, "failures": 3, "passes": 7}
    b = {"duration_ms": 3000, "failures": 1, "passes": 9}
    comparison = compare_runs("postman", a, b)
    assert set(comparison.metrics) == {"duration", "failAssertions", "passAssertions"}
    assert comparison.checks_b.to_dict() == {"pass": 9, "fail": 1}
    assert comparison.performance_score()["score"] == 100.0


def test_script_comparison_scales_error_fraction():
    a = {"metrics_overview": {"http_req_duration": {"p(95)": 200, "avg": 80}, "http_req_failed": {"value": 0.5}}}
    b = {"metrics_overview": {"http_req_duration": {"p(95)": 200, "avg": 90}}}
    comparison = compare_runs("script", a, b)
    assert comparison.metrics["errorRate"].test_a == 50.0
    assert comparison.metrics["errorRate"].diff is None
    assert comparison.metrics["errorRate"].trend == "unknown"
    assert comparison.metrics["p95Duration"].trend == "same"
    assert comparison.performance_score() == {"score": 0.0, "improvements": 0, "regressions": 1, "total": 1}


def test_no_changes_has_no_score():
    comparison = compare_runs("postman", {"duration_ms": 10}, {"duration_ms": 10})
    assert comparison.performance_score() is None


def test_higher_is_better_direction():
    metric = MetricDiff(test_a=5, test_b=8, direction=Direction.HIGHER)
    assert metric.improved is True
    assert MetricDiff(test_a=5, test_b=8, direction=Direction.NEUTRAL).improved is None


def test_mismatched_sub_types_are_rejected():
    with pytest.raises(ValueError):
        compare_runs("quick", {}, {}, sub_type_b="postman")


def test_unknown_sub_type_is_rejected():
    with pytest.raises(ValueError):
        compare_runs("jmeter", {}, {})
