"""FastAPI application entrypoint and configuration.

This module provides the application factory that configures logging,
builds the shared SurveyDataService, sets up CORS middleware, includes the
survey data router, and exposes a health check endpoint.

Example:
    The application can be run with uvicorn:
        $ uvicorn sikyon.main:app --port 3180 --reload

    Or imported and used programmatically:
        >>> from sikyon.main import create_app
        >>> app = create_app(Settings(data_dir=Path("/srv/sikyon/data")))
"""

import sys

import fastapi
from fastapi.middleware import cors
from loguru import logger

from sikyon.api import data
from sikyon.core import config
from sikyon.services import survey


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with a stderr sink at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} | {message} | {extra}"
        ),
    )


def create_app(settings: config.Settings | None = None) -> fastapi.FastAPI:
    """Create and configure the FastAPI application.

    The SurveyDataService is built here, once, and stored on ``app.state``
    so that its layer caches live exactly as long as the application.

    Args:
        settings: Settings to use; defaults to the cached environment
            settings.

    Returns:
        Configured FastAPI application instance ready for ASGI server.
    """
    settings = settings or config.get_settings()
    configure_logging(settings.log_level)

    app = fastapi.FastAPI(title="Sikyon Survey API", version="0.1.0")
    app.state.survey = survey.SurveyDataService.from_settings(settings)

    app.include_router(data.router)

    app.add_middleware(
        cors.CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:  # type: ignore[misc]
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "ok", "message": "Sikyon API is running"}

    logger.info("Serving survey layers from {}", settings.data_dir)
    return app


app = create_app()
