import logging

from fastapi import APIRouter
from fastapi import Request
from fastapi.responses import PlainTextResponse
from fastapi.responses import Response

from commit_chart.core.palette import UnknownColorError
from commit_chart.core.palette import parse_color
from commit_chart.services.commit_history import create_chart_image
from commit_chart.settings import Settings


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/chart", response_class=Response)
async def get_commit_chart(
    request: Request,
    username: str | None = None,
    repository: str | None = None,
    color: str | None = None,
) -> Response:
    """Return a cumulative commit history chart for a GitLab project as PNG."""

    settings: Settings = request.app.state.settings
    logger.info("GET %s%s", request.url.hostname, request.url.path + _query(request))

    username = (username or "").strip()
    repository = (repository or "").strip()
    if not username or not repository:
        return PlainTextResponse(
            "Username and repository are required", status_code=400
        )

    try:
        chart_color = parse_color(color, default=settings.default_color)
    except UnknownColorError as exc:
        return PlainTextResponse(str(exc), status_code=400)

    try:
        image = await create_chart_image(
            username=username,
            repository=repository,
            color=chart_color,
            settings=settings,
        )
    except Exception:
        logger.exception("Error creating chart image for %s/%s", username, repository)
        return PlainTextResponse("Error creating chart image", status_code=500)

    return Response(
        content=image,
        media_type="image/png",
        headers={"Cache-Control": f"public, max-age={settings.cache_max_age}"},
    )


def _query(request: Request) -> str:
    return f"?{request.url.query}" if request.url.query else ""
