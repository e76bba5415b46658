import time
from prometheus_client import Counter, Histogram

"""
Metric Semantics

These metrics describe the results service itself, not the test runs it
classifies. They answer: "How many runs did we grade, how were they graded,
and how long did grading take?"

Evaluation time is a Histogram so p50/p95 of grading cost can be read off
the buckets. Grading is pure and should stay well under a millisecond.
"""

# Prometheus Metrics
VERDICTS_TOTAL = Counter(
    "verdicts_total",
    "Total count of verdicts issued, by label",
    ["label"]
)

VERDICT_EVALUATION_SECONDS = Histogram(
    "verdict_evaluation_seconds",
    "Time spent extracting metrics and classifying a single summary.",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05]
)

COMPARISONS_TOTAL = Counter(
    "comparisons_total",
    "Total count of run comparisons, by sub-type",
    ["sub_type"]
)

CHART_POINTS = Histogram(
    "chart_points",
    "Number of aligned points returned per chart request.",
    buckets=[10, 100, 1000, 10000, 100000]
)

def timed_evaluation(evaluate, container):
    """
    Run an evaluation and record its duration and label.
    Returns (result, elapsed_ms).
    """
    start_time = time.perf_counter()
    result = evaluate(container)
    elapsed = time.perf_counter() - start_time

    VERDICT_EVALUATION_SECONDS.observe(elapsed)
    VERDICTS_TOTAL.labels(label=result.label.value).inc()
    return result, elapsed * 1000

def record_comparison(sub_type: str):
    COMPARISONS_TOTAL.labels(sub_type=sub_type).inc()

def record_chart_points(count: int):
    CHART_POINTS.observe(count)
