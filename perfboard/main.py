import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app
from perfboard.config import config, logger
from perfboard.api import router
from perfboard.health.latency_monitor import LatencyMonitorMiddleware
from perfboard.logging import event_logger

app = FastAPI(
    title="Perfboard Results Service",
    description="Normalizes, formats and grades API/performance test run summaries"
)

# Add Latency Monitoring Middleware
app.add_middleware(LatencyMonitorMiddleware)

# Mount Prometheus metrics endpoint
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

app.include_router(router)

@app.on_event("startup")
async def startup_event():
    logger.info("Application starting up...")
    logger.info(f"Configuration loaded: batch limit {config.MAX_BATCH_SIZE}, log level {config.LOG_LEVEL}")
    event_logger.log_service_start()

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutting down...")

def run():
    uvicorn.run("perfboard.main:app", host=config.API_HOST, port=config.API_PORT, reload=False)

if __name__ == "__main__":
    # In production, we usually run via uvicorn command, but this allows python -m perfboard.main
    run()
