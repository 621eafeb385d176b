"""Configuration for the Notion knowledge server.

Settings are read from the environment (or a local .env file) once at
process start by ``load_settings()`` and then passed explicitly to the
components that need them. Handler code never reads the environment.
"""

import logging
import sys

from pydantic import BaseModel, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

REQUIRED_SETTINGS = ("notion_token", "notion_database_id")


class PropertyNames(BaseModel):
    """Names of the Notion database properties backing a knowledge record."""

    title: str
    project: str
    knowledge_type: str
    importance: str
    keywords: str
    language: str
    file_path: str
    last_edited: str


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Notion
    notion_token: SecretStr
    notion_database_id: str
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_timeout_seconds: float = 30.0

    # Notion database property names
    notion_prop_title: str = "標題"
    notion_prop_project: str = "專案名稱"
    notion_prop_type: str = "知識類型"
    notion_prop_importance: str = "重要程度"
    notion_prop_keywords: str = "關鍵字"
    notion_prop_language: str = "程式語言"
    notion_prop_file_path: str = "檔案路徑"
    notion_prop_last_edited: str = "最後修改"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_allowed_origins: str = "*"

    # Error tracking
    sentry_dsn: str = ""

    @field_validator("notion_token")
    @classmethod
    def _token_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("notion_database_id")
    @classmethod
    def _database_id_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse the comma-separated CORS origins."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def property_names(self) -> PropertyNames:
        return PropertyNames(
            title=self.notion_prop_title,
            project=self.notion_prop_project,
            knowledge_type=self.notion_prop_type,
            importance=self.notion_prop_importance,
            keywords=self.notion_prop_keywords,
            language=self.notion_prop_language,
            file_path=self.notion_prop_file_path,
            last_edited=self.notion_prop_last_edited,
        )


def load_settings(**overrides) -> Settings:
    """Build the settings object, failing fast on missing configuration.

    Raises:
        ConfigurationError: If NOTION_TOKEN or NOTION_DATABASE_ID is missing
            or empty, or another setting cannot be parsed.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = []
        for error in e.errors():
            if error["loc"]:
                name = str(error["loc"][0]).upper()
                if name not in fields:
                    fields.append(name)
        missing = [f for f in fields if f.lower() in REQUIRED_SETTINGS]
        if missing:
            message = f"Missing required configuration: {', '.join(missing)}"
        else:
            message = f"Invalid configuration: {', '.join(fields)}"
        raise ConfigurationError(message, missing=missing) from e


def configure_logging(level: str = "INFO", stream=None) -> None:
    """Configure root logging once for an entry point.

    The stdio transport passes ``sys.stderr`` so that stdout stays reserved
    for protocol messages.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=stream or sys.stderr,
    )
