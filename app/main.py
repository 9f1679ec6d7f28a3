"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import get_places_client
from app.exceptions import ConfigurationError, DiscoveryError
from app.routers import geocoding, places

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warn about missing credentials on startup; close the HTTP client on shutdown."""
    if not settings.google_places_api_key:
        logger.error("GOOGLE_PLACES_API_KEY is not set; place endpoints will fail")

    yield

    if get_places_client.cache_info().currsize:
        await get_places_client().aclose()
        get_places_client.cache_clear()


# Create FastAPI app
app = FastAPI(
    title="Restaurant Roulette API",
    description="Picks one random nearby restaurant that matches your filters",
    version="1.0.0",
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_origin_regex=r"chrome-extension://.*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DiscoveryError)
async def discovery_error_handler(request: Request, exc: DiscoveryError):
    """Map pipeline errors to stable caller messages; keep the cause in the log."""
    if isinstance(exc, ConfigurationError):
        logger.error(f"{request.method} {request.url.path}: configuration error: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.kind}: {exc}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.public_message, "error": exc.kind},
    )


# Include routers
app.include_router(geocoding.router, prefix="/api/v1")
app.include_router(places.router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Restaurant Roulette API",
        "version": "1.0.0",
        "docs": "/docs" if settings.environment == "development" else "disabled",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
