import requests
import sys

BASE_URL = "http://localhost:8000"

def log(msg):
    print(f"[TEST] {msg}")

def check_health():
    try:
        r = requests.get(f"{BASE_URL}/health", timeout=2)
        log(f"Health Check: {r.status_code}")
        return r.status_code == 200
    except requests.exceptions.RequestException:
        return False

def check_verdict(container, expected):
    r = requests.post(f"{BASE_URL}/results/verdict", json=container, timeout=2)
    label = r.json().get("label")
    log(f"Verdict {container} -> {label} (expected {expected})")
    return label == expected

def check_format():
    r = requests.get(f"{BASE_URL}/results/format/postman_duration", params={"value": 1500}, timeout=2)
    body = r.json()
    log(f"Format 1500ms -> {body.get('text')}")
    return body.get("value") == 1.5 and body.get("suffix") == " s"

def verify_metrics_endpoint():
    try:
        r = requests.get(f"{BASE_URL}/metrics", timeout=2)
        for line in r.text.split("\n"):
            if line.startswith("verdicts_total"):
                log(f"Verdict Metric: {line}")
                return True
    except requests.exceptions.RequestException:
        pass
    return False

def main():
    log("Starting Local Verification...")

    if not check_health():
        log("ERROR: Service not reachable. Is it running?")
        sys.exit(1)

    checks = [
        check_verdict({"summary": {"duration_ms": 1000, "error_rate": {"value": 0}}}, "Passed"),
        check_verdict({"summary": {"duration_ms": 5000}}, "Warning"),
        check_verdict({"summary": {"failures": 3, "passes": 7}}, "Failed"),
        check_format(),
        verify_metrics_endpoint(),
    ]

    if all(checks):
        log("SUCCESS: All checks passed")
    else:
        log(f"FAILURE: {checks.count(False)} check(s) failed")
        sys.exit(1)

if __name__ == "__main__":
    main()
