import math
from enum import Enum
from typing import Optional, Sequence, Tuple

"""
Threshold Tables

A threshold table is an ordered list of (upper_bound, category) pairs.
A value belongs to the first category whose bound it does not exceed.
The last bound is +inf so every number lands somewhere.

The tables below are the colour bands used when rendering result tables and
metric cards. They are plain module constants so they can be imported and
tested on their own.
"""

INF = math.inf


class ColorClass(str, Enum):
    NONE = ""
    GREEN = "bg-green-100 text-green-700"
    YELLOW = "bg-yellow-100 text-yellow-700"
    ORANGE = "bg-orange-100 text-orange-700"
    RED = "bg-red-100 text-red-700"


class ThresholdTable:
    def __init__(self, name: str, entries: Sequence[Tuple[float, ColorClass]]):
        if not entries:
            raise ValueError(f"Threshold table '{name}' must have at least one entry")
        bounds = [bound for bound, _ in entries]
        for lower, upper in zip(bounds, bounds[1:]):
            if upper <= lower:
                raise ValueError(f"Threshold table '{name}' bounds must be strictly increasing")
        self.name = name
        self.entries = tuple(entries)

    def index_of(self, value: Optional[float]) -> Optional[int]:
        """
        Position of the band a value falls into, or None for missing data.
        """
        if value is None:
            return None
        for index, (bound, _) in enumerate(self.entries):
            if value <= bound:
                return index
        return len(self.entries) - 1

    def __call__(self, value: Optional[float]) -> ColorClass:
        return classify(self, value)

    def __repr__(self):
        return f"ThresholdTable({self.name!r}, {list(self.entries)!r})"


def classify(table: ThresholdTable, value: Optional[float]) -> ColorClass:
    """
    Return the category of the first bound >= value.

    None means "no data" and maps to ColorClass.NONE.
    NaN compares false against every bound and falls through to the last band.
    """
    index = table.index_of(value)
    if index is None:
        return ColorClass.NONE
    return table.entries[index][1]


# Postman: whole-collection run time, can be long
DURATION_TABLE = ThresholdTable("duration", [
    (3000, ColorClass.GREEN),     # <= 3s: excellent
    (10000, ColorClass.YELLOW),   # <= 10s: fair
    (30000, ColorClass.ORANGE),   # <= 30s: slow
    (INF, ColorClass.RED),        # > 30s: poor
])

# Quick + Script: P95 response time, stricter
P95_TABLE = ThresholdTable("p95", [
    (500, ColorClass.GREEN),
    (1000, ColorClass.YELLOW),
    (2000, ColorClass.ORANGE),
    (INF, ColorClass.RED),
])

# Error rate in percent
ERROR_RATE_TABLE = ThresholdTable("error_rate", [
    (0, ColorClass.GREEN),
    (5, ColorClass.YELLOW),
    (INF, ColorClass.RED),
])

# Postman assertion fail rate in percent
FAIL_RATE_TABLE = ThresholdTable("fail_rate", [
    (0, ColorClass.GREEN),
    (5, ColorClass.YELLOW),
    (20, ColorClass.ORANGE),
    (INF, ColorClass.RED),
])


def duration_color(ms: Optional[float]) -> ColorClass:
    return classify(DURATION_TABLE, ms)


def p95_color(ms: Optional[float]) -> ColorClass:
    return classify(P95_TABLE, ms)


def error_rate_color(percent: Optional[float]) -> ColorClass:
    return classify(ERROR_RATE_TABLE, percent)


def fail_rate_color(percent: Optional[float]) -> ColorClass:
    return classify(FAIL_RATE_TABLE, percent)
