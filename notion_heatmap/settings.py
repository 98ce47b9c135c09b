from datetime import date

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class MissingConfigurationError(Exception):
    """Raised when required Notion credentials are not configured."""


class Settings(BaseSettings):
    """Run settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    database_id: str | None = None
    notion_token: str | None = None
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    date_property: str = "新闻日期"
    year: int | None = None
    output_dir: str = "output"
    write_svg: bool = False
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def target_year(self) -> int:
        """Return the configured year, falling back to the current one."""

        if self.year is not None:
            return self.year
        return date.today().year


def require_notion_credentials(settings: Settings) -> tuple[str, str]:
    """Return `(database_id, token)` or fail before any work starts.

    Raises:
        MissingConfigurationError: If either value is missing or blank.
    """

    database_id = (settings.database_id or "").strip()
    token = (settings.notion_token or "").strip()
    if not database_id or not token:
        raise MissingConfigurationError("Missing DATABASE_ID or NOTION_TOKEN")
    return database_id, token
