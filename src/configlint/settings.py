"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from configlint.style import OutputFormat


class Settings(BaseSettings):
    """Configuration for the configlint command line.

    Values are read from ``CONFIGLINT_*`` environment variables and from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFIGLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    output_format: OutputFormat = OutputFormat.PLAIN
