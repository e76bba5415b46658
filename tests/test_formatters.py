import pytest

from perfboard.results.formatters import (
    FORMATTERS,
    ErrorRateFormatter,
    FailRateFormatter,
    NormalizedMetric,
    PostmanDurationFormatter,
    QuickP95Formatter,
    ScriptP95Formatter,
    format_metric,
    parse_duration,
    parse_percent,
)
from perfboard.results.thresholds import ColorClass


def test_duration_of_a_second_or_more_is_shown_in_seconds():
    assert parse_duration(1500) == NormalizedMetric(1.5, " s")
    assert parse_duration(1000) == NormalizedMetric(1.0, " s")
    assert parse_duration(12346) == NormalizedMetric(12.35, " s")


def test_duration_below_a_second_stays_in_ms():
    assert parse_duration(500) == NormalizedMetric(500.0, " ms")
    assert parse_duration(999.999) == NormalizedMetric(1000.0, " ms")
    assert parse_duration(12.3456) == NormalizedMetric(12.35, " ms")


def test_percent_scales_fractions_only():
    assert parse_percent(0.05) == NormalizedMetric(5.0, " %")
    assert parse_percent(1) == NormalizedMetric(100.0, " %")
    assert parse_percent(7) == NormalizedMetric(7.0, " %")
    assert parse_percent(0) == NormalizedMetric(0.0, " %")


@pytest.mark.parametrize("raw", [None, "12", [], {"value": 3}, True])
def test_missing_or_malformed_input_is_empty(raw):
    assert parse_duration(raw).value is None
    assert parse_percent(raw).suffix == ""
    assert PostmanDurationFormatter.format(raw).color == ColorClass.NONE


def test_duration_color_uses_raw_milliseconds():
    formatted = PostmanDurationFormatter.format(3500)
    assert formatted.normalized == NormalizedMetric(3.5, " s")
    assert formatted.normalized.text == "3.50 s"
    # 3.5 would be green, 3500 ms is past the 3 s band
    assert formatted.color == ColorClass.YELLOW
    assert formatted.color != PostmanDurationFormatter.color(3.5)


def test_p95_formatters_share_the_p95_table():
    assert QuickP95Formatter.format(1500).color == ColorClass.ORANGE
    assert ScriptP95Formatter.format(1500).color == ColorClass.ORANGE
    assert PostmanDurationFormatter.format(1500).color == ColorClass.GREEN


def test_rate_formatters():
    assert ErrorRateFormatter.format(7).color == ColorClass.RED
    assert FailRateFormatter.format(7).color == ColorClass.ORANGE


def test_named_formatters_are_registered():
    assert set(FORMATTERS) == {"postman_duration", "quick_p95", "script_p95", "error_rate", "fail_rate"}


def test_format_metric_to_dict():
    assert format_metric("quick_p95", 250).to_dict() == {
        "value": 250.0,
        "suffix": " ms",
        "text": "250.00 ms",
        "color": "bg-green-100 text-green-700",
    }


def test_empty_metric_renders_as_dash():
    assert format_metric("error_rate", None).to_dict() == {
        "value": None,
        "suffix": "",
        "text": "-",
        "color": "",
    }


def test_unknown_kind_raises():
    with pytest.raises(KeyError):
        format_metric("throughput", 10)


@pytest.mark.parametrize("raw", [10**400, float("inf"), float("-inf"), float("nan")])
def test_non_finite_input_is_empty(raw):
    formatted = format_metric("postman_duration", raw)
    assert formatted.normalized.value is None
    assert formatted.color == ColorClass.NONE
    assert format_metric("error_rate", raw).normalized.value is None
