"""
Configuration settings for idbench.

Uses Pydantic Settings to load environment variables for the database
connection, logging, and insertion defaults. Values can also come from a
local `.env` file.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default Snowflake epoch (2010-11-04T01:42:54.657Z), shared by most generators.
TWITTER_EPOCH_MS = 1_288_834_974_657


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("idbench", alias="DB_NAME")
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")
    db_connect_timeout: int = Field(10, alias="DB_CONNECT_TIMEOUT")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Insertion defaults
    bench_mode: str = Field("uuid", alias="BENCH_MODE")
    bench_rows: int = Field(1_000_000, alias="BENCH_ROWS")
    bench_progress_interval: int = Field(10_000, alias="BENCH_PROGRESS_INTERVAL")
    results_dir: str = Field("results", alias="RESULTS_DIR")

    # Snowflake generator; node is drawn at random per run when unset
    snowflake_node: Optional[int] = Field(None, alias="SNOWFLAKE_NODE")
    snowflake_epoch_ms: int = Field(TWITTER_EPOCH_MS, alias="SNOWFLAKE_EPOCH_MS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings", "TWITTER_EPOCH_MS"]
