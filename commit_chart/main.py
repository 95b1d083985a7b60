import logging

import uvicorn
from fastapi import FastAPI

from commit_chart.api.routes.chart import router as chart_router
from commit_chart.core.fonts import register_fonts
from commit_chart.core.middleware import SecurityHeadersMiddleware
from commit_chart.core.observability import configure_logging
from commit_chart.core.observability import init_sentry
from commit_chart.core.palette import parse_color
from commit_chart.services.commit_history import get_timezone
from commit_chart.settings import Settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application with middleware and routes."""

    app_settings = settings or Settings()
    configure_logging(app_settings)
    init_sentry(app_settings)

    # Fail at startup rather than on every request.
    parse_color(None, default=app_settings.default_color)
    get_timezone(app_settings.chart_timezone)
    register_fonts(app_settings.font_dir)

    app = FastAPI(title="Commit Chart", docs_url=None, redoc_url=None)
    app.state.settings = app_settings

    app.add_middleware(SecurityHeadersMiddleware)
    app.include_router(chart_router)
    return app


app = create_app()


def run() -> None:
    settings: Settings = app.state.settings
    logger.info(
        "Server is running at http://localhost:%d/chart", settings.port
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
