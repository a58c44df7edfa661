# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application configuration loaded from the environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = "sqlite:///./schoolerp.db"
    session_expiry_days: int = 7
    seed_rbac_on_startup: bool = True
    # Applied as a statement timeout on branch listing (PostgreSQL only)
    branch_query_timeout_seconds: int = 5
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


settings = Settings()
