"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from src.api.middleware.error_handler import error_handler_middleware
from src.api.middleware.latency_logging import latency_logging_middleware
from src.api.middleware.request_size import request_size_limit_middleware
from src.api.routes import health, likes, matches, photos, profiles
from src.core.config import get_settings
from src.core.rate_limiter import InMemoryRateLimiter, RateLimitConfig
from src.core.store import InMemoryMatchStore, MatchStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_store() -> MatchStore:
    """Create the match store selected by STORAGE_BACKEND."""
    settings = get_settings()
    if settings.storage_backend == "memory":
        logger.warning("Using in-memory match store; data will not survive a restart")
        return InMemoryMatchStore()

    from src.core.supabase import get_supabase_client
    from src.core.supabase_store import SupabaseMatchStore

    return SupabaseMatchStore(get_supabase_client())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the match store and rate limiter unless already set on app.state.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to the application.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s in %s mode", settings.app_name, settings.app_env)

    if getattr(app.state, "store", None) is None:
        app.state.store = build_store()
    logger.info("Match store ready: %s", type(app.state.store).__name__)

    if getattr(app.state, "rate_limiter", None) is None:
        app.state.rate_limiter = InMemoryRateLimiter(RateLimitConfig.from_settings())
    await app.state.rate_limiter.start_cleanup_task()
    logger.info("Rate limiter initialized")

    yield
    # Shutdown
    await app.state.rate_limiter.stop_cleanup_task()
    logger.info("Rate limiter shutdown")
    logger.info("Shutting down %s", settings.app_name)


def create_app(store: MatchStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Match store to use instead of the configured backend.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Duo Match API",
        description="Matching and messaging backend for couples looking for couple friends",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.rate_limiter = None

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add error handler middleware (outermost - catches all errors)
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)

    # Add latency logging middleware (tracks request timing)
    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    # Add request size limit middleware (rejects oversized requests early)
    app.add_middleware(BaseHTTPMiddleware, dispatch=request_size_limit_middleware)

    # Mount health routes at root level (no prefix)
    app.include_router(health.router)

    # Create API v1 router for versioned endpoints
    api_v1_router = APIRouter(prefix="/api/v1")

    # Profile and photo routes
    api_v1_router.include_router(profiles.router)
    api_v1_router.include_router(photos.router)

    # Like, match and message routes
    api_v1_router.include_router(likes.router)
    api_v1_router.include_router(matches.router)

    app.include_router(api_v1_router)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
