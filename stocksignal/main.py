"""
StockSignal Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stocksignal.core.config import settings
from stocksignal.api.v1 import router as api_v1_router
from stocksignal.services.analysis import get_analysis_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    service = get_analysis_service()
    logger.info(
        f"Analysis engine ready (min {service.config.min_observations} observations)"
    )

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    StockSignal Technical Analysis API

    ## Architecture
    - **Series Preprocessor**: Validates the price history
    - **Indicator Library**: RSI, MACD, Bollinger Bands, volatility (pure Python/NumPy)
    - **Recommendation Synthesizer**: Scores indicators into BUY / SELL / HOLD

    ## Core Principles
    - Caller supplies the price history
    - Deterministic: same series, same result
    - All-or-nothing: no partial analysis
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    healthy = await get_analysis_service().health_check()
    return {
        "status": "healthy" if healthy else "unhealthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "StockSignal Backend API",
        "docs": "/docs",
        "health": "/health",
    }
