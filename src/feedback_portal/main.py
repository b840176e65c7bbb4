"""Main entry point for FastAPI server."""

import uvicorn

from feedback_portal.config.settings import Settings


def main():
    """Start the FastAPI server."""
    settings = Settings()

    uvicorn.run(
        "feedback_portal.api.app:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level="info"
    )


if __name__ == "__main__":
    main()
