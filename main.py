"""
Image Versions - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402
from api.routers import versions  # noqa: E402
from config import get_settings  # noqa: E402
from core.invokers import create_invoker  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting Image Versions server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Engine: {settings.engine.backend.value}")

    app.state.invoker = create_invoker(
        settings.engine.backend.value,
        timeout=settings.engine.timeout_seconds,
        magick_binary=settings.engine.magick_binary,
    )
    app.state.config = settings.to_dict()

    yield

    logger.info("Image Versions server stopped")


# Create FastAPI app
app = FastAPI(
    title="Image Versions",
    description="Resized and cropped versions of source images",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(versions.router, prefix="/api/versions", tags=["Versions"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Image Versions",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "versions": "/api/versions",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "engine": getattr(app.state, "invoker", None) is not None,
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
    )
