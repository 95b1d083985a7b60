from collections.abc import AsyncIterator
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from commit_chart.models import CommitRecord
from commit_chart.models import ProjectMeta
from commit_chart.settings import Settings


class PaginationLimitError(RuntimeError):
    """Raised when the commit listing still has full pages at the page cap."""


def encode_project_path(username: str, repository: str) -> str:
    """URL-encode `namespace/project` the way GitLab expects in `/projects/:id`."""

    return quote(f"{username}/{repository}", safe="")


def create_gitlab_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    headers = {
        "Accept": "application/json",
        "User-Agent": "commit-chart",
    }
    if settings.gitlab_token:
        headers["PRIVATE-TOKEN"] = settings.gitlab_token

    return httpx.AsyncClient(
        base_url=settings.gitlab_api_url,
        headers=headers,
        timeout=settings.gitlab_timeout_seconds,
        transport=transport,
    )


async def fetch_project(client: httpx.AsyncClient, project_path: str) -> ProjectMeta:
    """Fetch creation date and display path for an encoded project path."""

    response = await client.get(f"/projects/{project_path}")
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitLab project response is invalid")

    return ProjectMeta.model_validate(payload)


async def _get_commit_page(
    client: httpx.AsyncClient, project_path: str, per_page: int, page: int
) -> list[Any]:
    response = await client.get(
        f"/projects/{project_path}/repository/commits",
        params={"per_page": per_page, "page": page},
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, list):
        raise ValueError("GitLab commit listing response is invalid")
    return payload


async def iter_commit_pages(
    client: httpx.AsyncClient,
    project_path: str,
    per_page: int = 100,
    max_pages: int = 1000,
) -> AsyncIterator[list[CommitRecord]]:
    """Yield commit pages in order until GitLab returns a short page.

    Pages are requested one at a time. A page with fewer than `per_page`
    records is the last one. When page `max_pages` is full, one more page
    is requested to confirm the listing is exhausted.

    Raises:
        PaginationLimitError: If there are commits beyond page `max_pages`.
    """

    page = 1
    while True:
        payload = await _get_commit_page(client, project_path, per_page, page)
        if page > max_pages:
            if payload:
                raise PaginationLimitError(
                    f"commit history exceeds {max_pages} pages of {per_page}"
                )
            return

        yield [CommitRecord.model_validate(item) for item in payload]

        if len(payload) < per_page:
            return
        page += 1


async def fetch_commits(
    client: httpx.AsyncClient,
    project_path: str,
    per_page: int = 100,
    max_pages: int = 1000,
) -> list[CommitRecord]:
    """Collect every commit of a project across all listing pages."""

    commits: list[CommitRecord] = []
    async for page in iter_commit_pages(
        client, project_path, per_page=per_page, max_pages=max_pages
    ):
        commits.extend(page)
    return commits
