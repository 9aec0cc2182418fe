"""Application configuration via pydantic-settings."""

import os
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

DEFAULT_CONFIG_FILE = "config.toml"


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class GitHubConfig(BaseModel):
    # Shared secret configured on the GitHub webhook; empty disables the endpoint
    webhook_secret: str = ""


class TelegramConfig(BaseModel):
    bot_token: str = ""
    api_base: str = "https://api.telegram.org"
    timeout_seconds: float = 10.0
    disable_web_page_preview: bool = False


class RouteConfig(BaseModel):
    """One subscription rule: which repos and events go to which chat."""

    repo_pattern: str
    chat_id: int | str
    events: list[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        toml_file=DEFAULT_CONFIG_FILE,
    )

    # App
    debug: bool = False
    log_level: str = "INFO"

    server: ServerConfig = ServerConfig()
    github: GitHubConfig = GitHubConfig()
    telegram: TelegramConfig = TelegramConfig()

    # Evaluated in order; every matching rule receives the event
    routing: list[RouteConfig] = []

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = os.environ.get("APP_CONFIG_FILE", DEFAULT_CONFIG_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            file_secret_settings,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
