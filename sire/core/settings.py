"""Runtime settings read from SIRE_* environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MANIFEST_FILE_NAME = "manifest.yml"
PLACEHOLDER_TOKEN = "{{project_slug}}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SIRE_", case_sensitive=False)

    manifest_file_name: str = Field(default=MANIFEST_FILE_NAME, min_length=1)
    placeholder_token: str = Field(default=PLACEHOLDER_TOKEN, min_length=1)
    log_level: str = "INFO"
