from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from perfboard.results.summary import as_number, dig

TIME_KEYS = ("timestamp", "time", "created_at", "date")
VALUE_KEYS = ("response_time", "responseTime", "duration", "value")


@dataclass(frozen=True)
class ChartPoint:
    time: int
    test_a: Optional[float] = None
    test_b: Optional[float] = None

    def to_dict(self):
        return {"time": self.time, "testA": self.test_a, "testB": self.test_b}


def extract_time(item: Mapping) -> Optional[str]:
    for key in TIME_KEYS:
        value = item.get(key)
        if value:
            return value
    return None


def extract_response_time(item: Mapping) -> Optional[float]:
    for key in VALUE_KEYS:
        value = as_number(item.get(key))
        if value is not None:
            return value
    if item.get("metric") == "http_req_duration":
        value = as_number(dig(item, "data", "value"))
        if value is not None:
            return value
    # A zero responseTime under "test" is treated as absent
    value = as_number(dig(item, "test", "responseTime"))
    if value:
        return value
    return None


def normalize_series(items: Optional[Iterable[Any]]) -> List[float]:
    """
    Keep the response times of items that carry both a time field and a value.
    The time itself is not parsed: points are placed by position, so any
    non-empty time marks the item as a real sample.
    """
    values = []
    for item in items or []:
        if not isinstance(item, Mapping):
            continue
        value = extract_response_time(item)
        if extract_time(item) is None or value is None:
            continue
        values.append(value)
    return values


def prepare_chart_data(series_a, series_b, interval_ms: int = 100) -> List[ChartPoint]:
    """
    Align two raw time series on a common x-axis for an overlay chart.

    Points are indexed by position, not by timestamp: point i sits at
    i * interval_ms for both runs, and the shorter run is padded with None.
    """
    values_a = normalize_series(series_a)
    values_b = normalize_series(series_b)
    length = max(len(values_a), len(values_b))

    points = []
    for index in range(length):
        points.append(ChartPoint(
            time=index * interval_ms,
            test_a=values_a[index] if index < len(values_a) else None,
            test_b=values_b[index] if index < len(values_b) else None,
        ))
    return points
