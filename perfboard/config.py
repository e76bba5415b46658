import os
import logging

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

class Config:
    def __init__(self, environ=None):
        env = os.environ if environ is None else environ
        self.API_HOST = env.get("API_HOST", "0.0.0.0")
        self.API_PORT = int(env.get("API_PORT", 8000))
        self.LOG_LEVEL = env.get("LOG_LEVEL", "INFO").upper()
        self.MAX_BATCH_SIZE = int(env.get("MAX_BATCH_SIZE", 500)) # Max summaries per batch verdict request
        self.CHART_POINT_INTERVAL_MS = int(env.get("CHART_POINT_INTERVAL_MS", 100)) # X-axis step for overlay charts
        self.MAX_MEMORY_MB_READY = int(env.get("MAX_MEMORY_MB_READY", 400)) # Threshold for readiness check
        self.MAX_LATENCY_MS = int(env.get("MAX_LATENCY_MS", 500)) # Max acceptable p95 request latency

        # Validation
        if not 0 < self.API_PORT < 65536:
            raise ValueError("API_PORT must be between 1 and 65535")
        if self.MAX_BATCH_SIZE <= 0:
            raise ValueError("MAX_BATCH_SIZE must be positive")
        if self.CHART_POINT_INTERVAL_MS <= 0:
            raise ValueError("CHART_POINT_INTERVAL_MS must be positive")
        if self.MAX_MEMORY_MB_READY <= 0:
            raise ValueError("MAX_MEMORY_MB_READY must be positive")
        if self.MAX_LATENCY_MS <= 0:
            raise ValueError("MAX_LATENCY_MS must be positive")
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL '{self.LOG_LEVEL}' is not a logging level")

config = Config()

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("perfboard")
