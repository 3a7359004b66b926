"""Application settings loaded from the environment.

Uses pydantic-settings for validation. Variables are prefixed with EB_WORKER_
and may be loaded from a local .env file by the CLIs.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from eb_worker.middleware.worker import DEFAULT_CONFIG_KEY, DEFAULT_MESSAGE_ID_HEADER, DEFAULT_QUEUE_HEADER


class Settings(BaseSettings):
    """Runtime settings for the worker (header names, mapping file, handler paths)."""

    model_config = SettingsConfigDict(env_prefix="EB_WORKER_", env_ignore_empty=True, extra="ignore")

    queue_header: str = Field(default=DEFAULT_QUEUE_HEADER, description="Header naming the originating queue")
    message_id_header: str = Field(default=DEFAULT_MESSAGE_ID_HEADER, description="Header carrying the message id")
    config_key: str = Field(default=DEFAULT_CONFIG_KEY, description="Configuration key holding the message mapping")
    mapping_file: Path | None = Field(default=None, description="JSON file mapping message names to middleware")
    handlers_path: list[str] = Field(default_factory=list, description="Directories searched for middleware")


def get_settings() -> Settings:
    """Return the loaded settings instance."""
    return Settings()
