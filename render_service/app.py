"""
FastAPI render service for paginated reports.

Stores JSON payloads, renders them through templates as pages sized for
PDF capture, and prints PDFs with Playwright/Chromium. Capture concurrency
is guarded via an asyncio semaphore (default 3).

Run:
    uvicorn render_service.app:app --host 0.0.0.0 --port 8000
"""

import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from src.common.logger import setup_logging
from src.common.repositories import reset_repository

from . import __version__, capture
from .config import get_settings, validate_config_on_startup
from .models import HealthResponse
from .routes import layout_router, pages_router, pdf_router, records_router

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

# Validate configuration at startup
validate_config_on_startup()

app = FastAPI(
    title="Report Renderer",
    version=__version__,
    description="JSON record store with paginated template pages and PDF capture",
)

# Configure CORS using validated settings
if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.on_event("startup")
async def validate_playwright_on_startup():
    """Probe Chromium so /health reports whether captures can work."""
    logger.info("Render service starting - validating Playwright installation...")
    await capture.validate_playwright()


@app.on_event("shutdown")
async def close_record_store():
    reset_repository()


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Returns HTTP 503 if Playwright validation failed on startup.
    """
    ready, error = capture.playwright_status()
    max_concurrent = get_settings().max_concurrent_captures

    if not ready:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "timestamp": datetime.utcnow().isoformat(),
                "active_captures": capture.active_captures(),
                "max_concurrent": max_concurrent,
                "playwright_ready": False,
                "playwright_error": error,
                "message": "Render service is unhealthy - Playwright/Chromium not available",
            },
        )

    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        active_captures=capture.active_captures(),
        max_concurrent=max_concurrent,
        playwright_ready=True,
        playwright_error=None,
    )


# Include modular route handlers; pages last, it owns /{template}
app.include_router(records_router)
app.include_router(layout_router)
app.include_router(pdf_router)
app.include_router(pages_router)
