"""FastAPI application for the feedback portal."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedback_portal import __version__
from feedback_portal.config.settings import Settings
from feedback_portal.feedback import endpoints as feedback_endpoints
from feedback_portal.utils.logger import setup_logger


api_logger = setup_logger("feedback_portal.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Lifespan context manager for startup/shutdown."""
    if feedback_endpoints.pipeline is None:
        try:
            feedback_endpoints.init_pipeline()
        except Exception as e:
            api_logger.error(f"Feedback pipeline unavailable: {e}")

    yield

    api_logger.info("Shutting down")


settings = Settings()

app = FastAPI(
    title=Settings.APP_NAME,
    description="Student feedback submission with sentiment classification",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

app.include_router(feedback_endpoints.router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "pipeline_loaded": feedback_endpoints.pipeline is not None
    }
