import argparse
import json
import sys

import requests

from perfboard.results.verdict import Verdict, evaluate

DEFAULT_SERVICE_URL = "http://localhost:8000"
FAILED_SHARE_LIMIT = 0.0
WARNING_SHARE_LIMIT = 20.0

def load_container(path):
    """
    Read a summary file. A bare summary (no "summary" / "testRun" key) is wrapped
    so it is found at container.summary.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading {path}: {e}")
        sys.exit(1)

    if isinstance(data, dict) and ("summary" in data or "testRun" in data):
        return data
    return {"summary": data}

def evaluate_remote(base_url, container):
    try:
        response = requests.post(f"{base_url.rstrip('/')}/results/verdict", json=container, timeout=5)
        response.raise_for_status()
        return response.json()["label"]
    except requests.exceptions.RequestException as e:
        print(f"Error contacting results service: {e}")
        sys.exit(1)

def evaluate_local(container):
    return evaluate(container).label.value

def build_scorecard(labels):
    counts = {label.value: 0 for label in Verdict}
    for label in labels:
        counts[label] += 1
    return counts

def overall_status(counts):
    total = sum(counts.values())
    if total == 0:
        return "INCONCLUSIVE"
    failed_share = counts[Verdict.FAILED.value] / total * 100
    warning_share = counts[Verdict.WARNING.value] / total * 100
    if failed_share > FAILED_SHARE_LIMIT:
        return "FAIL"
    if warning_share > WARNING_SHARE_LIMIT:
        return "WARNING"
    return "PASS"

def main(argv=None):
    parser = argparse.ArgumentParser(description="Grade test run summary files")
    parser.add_argument("files", nargs="+", help="Summary JSON files")
    parser.add_argument("--url", help=f"Grade through a running service, e.g. {DEFAULT_SERVICE_URL}")
    args = parser.parse_args(argv)

    print("--- Test Run Verdict Scorecard ---")
    print(f"Source: {args.url or 'local evaluation'}")
    print("-" * 40)

    labels = []
    for path in args.files:
        container = load_container(path)
        label = evaluate_remote(args.url, container) if args.url else evaluate_local(container)
        labels.append(label)
        print(f"{label:<8}  {path}")

    counts = build_scorecard(labels)
    print("-" * 40)
    for label, count in counts.items():
        print(f"{label + ':':<10}{count}")
    print("-" * 40)

    status = overall_status(counts)
    print(f"STATUS: {status}")
    return 1 if status == "FAIL" else 0

if __name__ == "__main__":
    sys.exit(main())
