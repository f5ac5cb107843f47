"""
Main FastAPI application entry point.

Initializes the FastAPI app with middleware, routers, exception
handlers, and the key-value store lifecycle.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postkv.api.router import api_router, root_router
from postkv.core.config import settings
from postkv.core.logging import get_logger, setup_logging
from postkv.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from postkv.schemas.common import HealthStatus
from postkv.storage.base import KeyValueStore
from postkv.storage.session import close_store, get_store, init_store

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects the key-value store on startup and closes it on shutdown.
    """
    logger.info("Starting application...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Store backend: {settings.STORE_BACKEND}")

    try:
        await init_store()
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    yield

    logger.info("Shutting down application...")

    try:
        await close_store()
    except Exception as e:
        logger.error(f"Shutdown error: {e}")

    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Markdown posts served from a key-value store with category, search and recency indexes",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware executes in reverse order of addition; CORS is outermost
# so error responses carry CORS headers too.
app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(root_router)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """
    Root endpoint - API information.

    Returns:
        Basic API information and links
    """
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "docs": "/docs" if settings.DEBUG else "disabled",
        "health": "/health",
    }


@app.get("/health", tags=["Health"])
async def health_check(
    store: Annotated[KeyValueStore, Depends(get_store)],
) -> JSONResponse:
    """
    Health check endpoint.

    Checks connectivity to the key-value store and returns overall
    system health status.

    Returns:
        JSON envelope with health status (503 when degraded)
    """
    health = HealthStatus(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=settings.APP_VERSION,
    )

    try:
        store_health = await store.health_check()
        health.services["store"] = store_health["status"]
        if store_health["status"] != "healthy":
            health.status = "degraded"
    except Exception as e:
        logger.error(f"Store health check failed: {e}")
        health.services["store"] = "unhealthy"
        health.status = "degraded"

    status_code = 200 if health.status == "healthy" else 503

    return JSONResponse(
        status_code=status_code,
        content={"success": status_code < 400, "data": health.model_dump()},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "postkv.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
