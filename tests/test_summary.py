import pytest

from perfboard.results.summary import (
    PostmanMetrics,
    QuickMetrics,
    dig,
    dig_number,
    extract_metrics,
    locate_summary,
)


def test_dig_walks_nested_mappings():
    data = {"a": {"b": {"p(95)": 12}}}
    assert dig(data, "a", "b", "p(95)") == 12
    assert dig(data, "a", "missing") is None
    assert dig(data, "a", "b", "p(95)", "deeper") is None
    assert dig(None, "a") is None
    assert dig([1, 2], "a") is None


def test_dig_number_drops_non_numeric_leaves():
    data = {"n": 3, "s": "3", "b": True, "f": float("nan")}
    assert dig_number(data, "n") == 3
    assert dig_number(data, "s") is None
    assert dig_number(data, "b") is None
    assert dig_number(data, "f") is None


def test_locate_summary_defaults_to_empty():
    assert locate_summary({}) == {}
    assert locate_summary(None) == {}
    assert locate_summary({"summary": 42}) == {}
    assert locate_summary({"testRun": {"rawSummary": {"x": 1}}}) == {"x": 1}


def test_extract_metrics_unions_all_engines():
    summary = {
        "duration_ms": 1200,
        "error_rate": {"value": 1.5},
        "failures": 2,
        "passes": 8,
        "http_req_duration_p95": {"value": 180},
        "http_reqs": {"value": 50},
        "http_req_failed": {"fails": 5},
        "metrics_overview": {
            "http_req_duration": {"p(95)": 210, "avg": 90},
            "http_req_failed": {"value": 0.01},
        },
    }
    metrics = extract_metrics(summary)
    assert metrics.postman == PostmanMetrics(duration_ms=1200, error_rate=1.5, failures=2, passes=8)
    assert metrics.postman.fail_rate == pytest.approx(20.0)
    assert metrics.quick.p95_ms == 180
    assert metrics.quick.error_rate == pytest.approx(10.0)
    assert metrics.script.p95_ms == 210
    assert metrics.script.avg_ms == 90
    assert metrics.script.error_rate == pytest.approx(1.0)


def test_quick_error_rate_with_missing_fail_count_is_zero():
    assert QuickMetrics(total_requests=10).error_rate == 0
    assert QuickMetrics(failed_requests=3).error_rate is None


def test_dig_number_drops_values_outside_float_range():
    data = {"huge": 10**400, "inf": float("inf"), "big": 10**300}
    assert dig_number(data, "huge") is None
    assert dig_number(data, "inf") is None
    assert dig_number(data, "big") == 10**300
