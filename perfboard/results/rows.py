from typing import Any, Dict, Mapping

from perfboard.results.formatters import (
    ErrorRateFormatter,
    FailRateFormatter,
    PostmanDurationFormatter,
    QuickP95Formatter,
    ScriptP95Formatter,
)
from perfboard.results.summary import dig_number, extract_postman, extract_quick, extract_script
from perfboard.results.verdict import evaluate

SUB_TYPES = ("postman", "quick", "script")


def _quick_row(summary: Mapping) -> Dict[str, Any]:
    quick = extract_quick(summary)
    total = quick.total_requests or 0

    # Older quick runs only recorded an average, banded like a Postman duration
    if quick.p95_ms is not None:
        latency = QuickP95Formatter.format(quick.p95_ms)
    else:
        latency = PostmanDurationFormatter.format(dig_number(summary, "http_req_duration_avg", "value"))

    error_rate = quick.error_rate if quick.error_rate is not None else 0
    return {
        "requests": total or None,
        "latency": latency.to_dict(),
        "error_rate": ErrorRateFormatter.format(error_rate).to_dict(),
    }


def _script_row(summary: Mapping) -> Dict[str, Any]:
    script = extract_script(summary)
    error_rate = (script.failed_fraction or 0) * 100
    return {
        "metrics": summary.get("total_metrics"),
        "latency": ScriptP95Formatter.format(script.p95_ms).to_dict(),
        "error_rate": ErrorRateFormatter.format(error_rate).to_dict(),
    }


def _postman_row(summary: Mapping) -> Dict[str, Any]:
    postman = extract_postman(summary)
    passes = postman.passes or 0
    failures = postman.failures or 0
    total = passes + failures
    fail_rate = failures / total * 100 if total > 0 else 0
    return {
        "requests": dig_number(summary, "total_requests"),
        "duration": PostmanDurationFormatter.format(postman.duration_ms).to_dict(),
        "fail_rate": FailRateFormatter.format(fail_rate).to_dict(),
    }


ROW_BUILDERS = {
    "postman": _postman_row,
    "quick": _quick_row,
    "script": _script_row,
}


def build_result_row(sub_type: str, summary: Mapping) -> Dict[str, Any]:
    """
    Formatted cells for one line of the test history table.

    Unlike the verdict, the row is sub-type specific: it shows the engine's own
    latency metric and rate, with missing rates displayed as 0 %.
    """
    if sub_type not in ROW_BUILDERS:
        raise ValueError(f"Unknown sub-type '{sub_type}', expected one of {', '.join(SUB_TYPES)}")
    if not isinstance(summary, Mapping):
        summary = {}
    row = ROW_BUILDERS[sub_type](summary)
    row["sub_type"] = sub_type
    row["verdict"] = evaluate({"summary": summary}).to_dict()
    return row
