"""
Main FastAPI application for the Korean spell-check service.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routes import health, spellcheck
from app.middleware.logging import RequestLoggingMiddleware
from app.services.provider_registry import (
    get_available_spellcheck_providers,
    get_effective_spellcheck_provider,
)
from app.utils.logger import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Korean spell-check service")
    logger.info(f"Environment: {'DEBUG' if settings.DEBUG else 'PRODUCTION'}")
    logger.info(f"Log level: {settings.LOG_LEVEL}")

    # Validate the default provider is configured (required - app fails without it)
    try:
        default_provider = get_effective_spellcheck_provider(None)
    except ValueError as e:
        raise RuntimeError(str(e)) from e

    logger.info(f"Default spell-check provider '{default_provider.value}' is configured")
    logger.info(f"Available spell-check providers: {get_available_spellcheck_providers()}")
    logger.info(
        "Chunking configured",
        max_chars=settings.SPELLCHECK_CHUNK_MAX_CHARS,
        timeout_seconds=settings.SPELLCHECK_TIMEOUT_SECONDS,
    )

    yield

    # Shutdown
    logger.info("Shutting down Korean spell-check service")


# Create FastAPI application
app = FastAPI(
    title="Korean Spell-Check Service",
    description="Checks Korean text against the Daum and PNU spell-check backends",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Validation failures use the {ok: false, error} shape with status 400
app.add_exception_handler(RequestValidationError, spellcheck.validation_exception_handler)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(spellcheck.router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with links to docs and health."""
    return {
        "message": "Korean Spell-Check Service",
        "docs": "/docs",
        "health": "/health",
        "spellcheck": "/api/spellcheck"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
