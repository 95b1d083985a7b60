from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    gitlab_api_url: str = "https://gitlab.com/api/v4"
    gitlab_token: str | None = None
    gitlab_timeout_seconds: float = 20.0
    commits_per_page: int = 100
    max_commit_pages: int = 1000
    chart_timezone: str = "UTC"
    cache_max_age: int = 86400
    default_color: str = "violet"
    font_dir: str = "fonts"
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
