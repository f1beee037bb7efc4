"""
User discovery service entrypoint with upstream client lifecycle management.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.config import settings
from app.features.user_discovery import (
    AggregationEngine,
    FollowGraphClient,
    UserDirectoryClient,
    discovery_router,
)
from app.infrastructure.observability.logging import get_logger, log_request, setup_logging
from app.middleware import RequestContextMiddleware
from app.routes import health

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown with proper resource management."""

    # Startup sequence
    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    user_directory = UserDirectoryClient()
    follow_graph = FollowGraphClient()

    app.state.user_directory = user_directory
    app.state.follow_graph = follow_graph
    app.state.aggregation_engine = AggregationEngine(user_directory, follow_graph)

    logger.info(
        "Upstream clients initialized",
        user_service=settings.upstream_host(settings.USER_SERVICE_URL),
        follow_service=settings.upstream_host(settings.FOLLOW_SERVICE_URL),
    )

    yield

    # Shutdown sequence
    logger.info("Application shutting down")

    shutdown_errors = []

    for name, client in (("user-service", user_directory), ("follow-service", follow_graph)):
        try:
            await client.close()
        except Exception as e:
            logger.error("Error closing upstream client", service=name, error=str(e))
            shutdown_errors.append(f"{name}: {e}")

    if shutdown_errors:
        logger.warning("Some clients had shutdown errors", errors=shutdown_errors)
    else:
        logger.info("All clients closed successfully")


app = FastAPI(
    title="User Discovery Service",
    description="Suggested users and friends/others views over the user and follow services",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(discovery_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
        request_id=getattr(request.state, "request_id", None),
    )
    return response


# Registered last so it runs first and the request ID is set for the timing middleware.
app.add_middleware(RequestContextMiddleware)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=3010)
