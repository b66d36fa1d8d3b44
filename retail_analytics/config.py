"""
Configuration settings for Retail Analytics.

Uses Pydantic Settings to load environment variables for the data source,
validation policy, report persistence and logging. Only the CLI and the run
pipeline read settings; the analytics core takes explicit arguments.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Data source
    data_path: str = Field("data/retail_sales.csv", alias="RETAIL_DATA_PATH")
    validation_mode: Literal["strict", "lenient"] = Field(
        "strict", alias="RETAIL_VALIDATION_MODE"
    )

    # Report output
    results_dir: str = Field("results", alias="RETAIL_RESULTS_DIR")
    persist_results: bool = Field(False, alias="RETAIL_PERSIST_RESULTS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def strict_validation(self) -> bool:
        return self.validation_mode == "strict"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
