import logging
from collections.abc import Iterable
from datetime import UTC
from datetime import date
from datetime import datetime
from datetime import timedelta
from datetime import tzinfo
from zoneinfo import ZoneInfo

import httpx

from commit_chart.clients.gitlab_client import PaginationLimitError
from commit_chart.clients.gitlab_client import create_gitlab_client
from commit_chart.clients.gitlab_client import encode_project_path
from commit_chart.clients.gitlab_client import fetch_commits
from commit_chart.clients.gitlab_client import fetch_project
from commit_chart.core.palette import ChartColor
from commit_chart.models import CommitRecord
from commit_chart.models import ProjectMeta
from commit_chart.models import TimeSeries
from commit_chart.services.chart_renderer import render_commit_chart
from commit_chart.settings import Settings

logger = logging.getLogger(__name__)


class CommitChartError(Exception):
    """Base error for failures while building a commit chart."""


class GitLabAPIError(CommitChartError):
    """Raised when GitLab requests fail or return unusable data."""


class CommitHistoryTooLargeError(GitLabAPIError):
    """Raised when the commit listing exceeds the configured page cap."""


def get_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def commit_day(timestamp: datetime, tz: tzinfo = UTC) -> date:
    """Return the calendar day of a timestamp in `tz`. Naive values are UTC."""

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz).date()


def count_commits_by_day(
    commits: Iterable[CommitRecord], tz: tzinfo = UTC
) -> dict[date, int]:
    daily_counts: dict[date, int] = {}
    for commit in commits:
        day = commit_day(commit.committed_date, tz)
        daily_counts[day] = daily_counts.get(day, 0) + 1
    return daily_counts


def build_cumulative_series(daily_counts: dict[date, int]) -> TimeSeries:
    """Turn per-day counts into a running total over the sorted days."""

    days: list[date] = []
    cumulative_counts: list[int] = []
    total = 0
    for day in sorted(daily_counts):
        total += daily_counts[day]
        days.append(day)
        cumulative_counts.append(total)
    return TimeSeries(days=days, cumulative_counts=cumulative_counts)


def aggregate_commit_history(
    commits: Iterable[CommitRecord], tz: tzinfo = UTC
) -> TimeSeries:
    """Cumulative commit count for each day that has at least one commit.

    Input order does not matter.
    """

    return build_cumulative_series(count_commits_by_day(commits, tz))


def pad_to_lifetime(series: TimeSeries, created_on: date, today: date) -> TimeSeries:
    """Extend a cumulative series to one point per day from creation to today.

    Days before the first commit get 0, days without commits carry the
    previous total forward and existing points are kept as they are. A
    series without commits becomes zeros from `created_on` to `today`.
    """

    counts_by_day = dict(series.points())
    if series.days:
        start = min(created_on, series.days[0])
        end = max(today, series.days[-1])
    else:
        start = min(created_on, today)
        end = today

    days: list[date] = []
    cumulative_counts: list[int] = []
    running_total = 0
    current_day = start
    while current_day <= end:
        running_total = counts_by_day.get(current_day, running_total)
        days.append(current_day)
        cumulative_counts.append(running_total)
        current_day += timedelta(days=1)

    return TimeSeries(days=days, cumulative_counts=cumulative_counts)


async def build_commit_history(
    client: httpx.AsyncClient,
    username: str,
    repository: str,
    settings: Settings,
    today: date | None = None,
) -> tuple[ProjectMeta, TimeSeries]:
    """Fetch a GitLab project's commits and return its padded cumulative series."""

    project_path = encode_project_path(username, repository)
    tz = get_timezone(settings.chart_timezone)

    try:
        project = await fetch_project(client, project_path)
        commits = await fetch_commits(
            client,
            project_path,
            per_page=settings.commits_per_page,
            max_pages=settings.max_commit_pages,
        )
    except PaginationLimitError as exc:
        raise CommitHistoryTooLargeError(str(exc)) from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise GitLabAPIError("GitLab API request failed") from exc

    logger.info(
        "Fetched %d commits for %s", len(commits), project.path_with_namespace
    )

    series = aggregate_commit_history(commits, tz)
    if today is None:
        today = datetime.now(tz).date()
    padded = pad_to_lifetime(series, commit_day(project.created_at, tz), today)
    return project, padded


async def create_chart_image(
    username: str,
    repository: str,
    color: ChartColor,
    settings: Settings,
    today: date | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """Run the whole fetch, aggregate, pad and render pipeline into PNG bytes."""

    async with create_gitlab_client(settings, transport=transport) as client:
        project, series = await build_commit_history(
            client, username, repository, settings, today=today
        )

    return render_commit_chart(
        series, title=f"Commit History - {project.path_with_namespace}", color=color
    )
