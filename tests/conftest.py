from collections.abc import Callable

import httpx
import pytest

from commit_chart.clients.gitlab_client import create_gitlab_client
from commit_chart.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gitlab_api_url="https://gitlab.example.com/api/v4",
        gitlab_token=None,
        font_dir="does-not-exist",
        sentry_dsn=None,
    )


@pytest.fixture
def make_client(settings: Settings) -> Callable[[httpx.MockTransport], httpx.AsyncClient]:
    def factory(transport: httpx.MockTransport) -> httpx.AsyncClient:
        return create_gitlab_client(settings, transport=transport)

    return factory
