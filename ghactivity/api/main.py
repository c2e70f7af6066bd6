"""
FastAPI application entry point.
GitHub Activity Aggregator - API Layer
"""
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ghactivity.api.middleware.error_handler import register_exception_handlers
from ghactivity.api.middleware.logging import RequestLoggingMiddleware
from ghactivity.api.routes import activity, health
from ghactivity.api.utils.client_manager import client_manager
from ghactivity.core.config import APP_VERSION, settings
from ghactivity.core.logger import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.
    Handles startup and shutdown events.
    """
    setup_logging()
    logger.info("Starting FastAPI application")

    try:
        await client_manager.initialize()

        if not settings.GITHUB_USERNAME:
            logger.warning("GITHUB_USERNAME is not set, activity endpoints will answer 400")

        logger.info("Application startup complete")
        yield

    finally:
        logger.info("Shutting down FastAPI application")
        await client_manager.shutdown()
        logger.info("Application shutdown complete")


# Initialize FastAPI app
app = FastAPI(
    title="GitHub Activity Aggregator",
    description="Normalized GitHub account activity: commits, contributions, stars and repository activity",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list() or ["*"],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)


# Request ID Middleware (registered last so it runs first)
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


register_exception_handlers(app)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "GitHub Activity Aggregator",
        "version": APP_VERSION,
        "status": "operational",
        "docs": "/docs",
        "health": "/health",
        "api": f"{settings.GITHUB_MOUNT_PATH}/api",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(health.router, tags=["Health"])
app.include_router(activity.router, prefix=f"{settings.GITHUB_MOUNT_PATH}/api", tags=["Activity"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ghactivity.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
