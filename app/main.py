"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.api.v1.routers import analysis, plots, projects, species

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_requests}/minute"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Plot store backend: {settings.plot_store_backend}")
    logger.info(f"Nested plot sizes: {settings.nested_plot_sizes}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if settings.plot_store_backend == "remote":
        from app.infrastructure.field_data_client import get_field_data_client
        await get_field_data_client().close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Biodiversity Analytics API for Vegetation Field Surveys

    This API computes diversity statistics and species-area relationships
    for vegetation plots recorded in the field.

    ## Features

    - **Survey Records**: Record plots and projects, list the species registry
    - **Diversity Indices**: Species richness, Shannon-Wiener, Simpson,
      Gini-Simpson, Pielou evenness, Menhinick and Margalef indices
    - **Species-Area Curves**: Power-law fit S = c * A^z with R²
    - **Project Statistics**: Indices averaged across a project's plots
    - **CSV Export**: Per-plot diversity summary
    - **Rate Limiting**: Protects the API from abuse

    ## Degenerate Data

    Analyses never fail on sparse data: empty plots, single species and
    too few species-area points yield zero-valued results instead of errors.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(analysis.router, prefix="/api/v1")
app.include_router(plots.router, prefix="/api/v1")
app.include_router(projects.router, prefix="/api/v1")
app.include_router(species.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
