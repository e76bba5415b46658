from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from perfboard.results.summary import as_number
from perfboard.results.thresholds import (
    DURATION_TABLE,
    ERROR_RATE_TABLE,
    FAIL_RATE_TABLE,
    P95_TABLE,
    ColorClass,
    ThresholdTable,
    classify,
)

SUFFIX_MS = " ms"
SUFFIX_SECONDS = " s"
SUFFIX_PERCENT = " %"


@dataclass(frozen=True)
class NormalizedMetric:
    value: Optional[float]
    suffix: str

    @property
    def text(self) -> str:
        if self.value is None:
            return "-"
        return f"{self.value:.2f}{self.suffix}"


@dataclass(frozen=True)
class FormattedMetric:
    normalized: NormalizedMetric
    color: ColorClass

    def to_dict(self):
        return {
            "value": self.normalized.value,
            "suffix": self.normalized.suffix,
            "text": self.normalized.text,
            "color": self.color.value,
        }


EMPTY = NormalizedMetric(value=None, suffix="")


def parse_duration(ms: Any) -> NormalizedMetric:
    """
    Milliseconds to a display value: seconds from 1000 ms upwards, ms below.
    """
    ms = as_number(ms)
    if ms is None:
        return EMPTY
    if ms >= 1000:
        return NormalizedMetric(value=round(ms / 1000, 2), suffix=SUFFIX_SECONDS)
    return NormalizedMetric(value=round(ms, 2), suffix=SUFFIX_MS)


def parse_percent(value: Any) -> NormalizedMetric:
    """
    Values <= 1 are fractions and get scaled by 100, larger ones are already percent.
    """
    value = as_number(value)
    if value is None:
        return EMPTY
    percent = value * 100 if value <= 1 else value
    return NormalizedMetric(value=round(percent, 2), suffix=SUFFIX_PERCENT)


class MetricFormatter:
    """
    Pairs a display transform with a threshold table.

    The colour is always computed from the raw input, so 3500 ms shows as
    "3.50 s" but is banded as 3500 ms.
    """

    def __init__(self, kind: str, parse: Callable[[Any], NormalizedMetric], table: ThresholdTable):
        self.kind = kind
        self.parse = parse
        self.table = table

    def color(self, value: Any) -> ColorClass:
        return classify(self.table, as_number(value))

    def format(self, value: Any) -> FormattedMetric:
        return FormattedMetric(normalized=self.parse(value), color=self.color(value))

    def __repr__(self):
        return f"MetricFormatter({self.kind!r}, table={self.table.name!r})"


PostmanDurationFormatter = MetricFormatter("postman_duration", parse_duration, DURATION_TABLE)
QuickP95Formatter = MetricFormatter("quick_p95", parse_duration, P95_TABLE)
ScriptP95Formatter = MetricFormatter("script_p95", parse_duration, P95_TABLE)
ErrorRateFormatter = MetricFormatter("error_rate", parse_percent, ERROR_RATE_TABLE)
FailRateFormatter = MetricFormatter("fail_rate", parse_percent, FAIL_RATE_TABLE)

FORMATTERS: Dict[str, MetricFormatter] = {
    formatter.kind: formatter
    for formatter in (
        PostmanDurationFormatter,
        QuickP95Formatter,
        ScriptP95Formatter,
        ErrorRateFormatter,
        FailRateFormatter,
    )
}


def get_formatter(kind: str) -> MetricFormatter:
    if kind not in FORMATTERS:
        raise KeyError(f"Unknown metric kind '{kind}'")
    return FORMATTERS[kind]


def format_metric(kind: str, value: Any) -> FormattedMetric:
    return get_formatter(kind).format(value)
