"""Plant Tracker API - FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plant_tracker.errors import RecordStoreError

from .config import get_settings
from .routes import weekly, daily, streak

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Plant Tracker API",
    description="Weekly plant diversity points, daily water and colors, and goal streaks",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(weekly.router)
app.include_router(daily.router)
app.include_router(streak.router)


@app.exception_handler(RecordStoreError)
async def record_store_error_handler(request: Request, exc: RecordStoreError):
    """Storage faults are reported as retryable, never as a crash."""
    log.error(f"Storage fault on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Could not save - try again"})


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "plant-tracker-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.dashboard_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
