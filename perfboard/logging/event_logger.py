import json
import logging
import time
import os
import socket

# Configure logger
logger = logging.getLogger("perfboard-events")
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)
logger.setLevel(logging.INFO)
logger.propagate = False

HOST_ID = os.getenv("HOSTNAME", socket.gethostname())

def log_event(event_type: str, details: dict = None):
    """
    Emit a structured JSON log event.
    """
    payload = {
        "timestamp": time.time(),
        "timestamp_iso": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "event_type": event_type,
        "host_id": HOST_ID,
        "details": details or {}
    }
    logger.info(json.dumps(payload))

def log_service_start():
    log_event("SERVICE_START", {"message": "Results service started"})

def log_verdict_evaluated(label: str, duration_ms: float):
    log_event("VERDICT_EVALUATED", {"label": label, "duration_ms": round(duration_ms, 3)})

def log_batch_evaluated(counts: dict, size: int):
    log_event("BATCH_EVALUATED", {"size": size, "counts": counts})

def log_runs_compared(sub_type: str, score: dict = None):
    log_event("RUNS_COMPARED", {"sub_type": sub_type, "score": score})

def log_comparison_rejected(reason: str):
    log_event("COMPARISON_REJECTED", {"reason": reason})
