# planner_config.py
# Runtime settings, read from PLANNER_* environment variables or a .env file.

import os
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Catalog / web ---
    catalog_file: str = os.path.join(BASE_DIR, "courses.json")
    static_folder: str = os.path.join(BASE_DIR, "static")
    index_document: str = "index.html"
    debug: bool = False

    # --- Logging ---
    log_level: str = "INFO"
    log_dir: str = "logs"

    # --- Search ---
    search_max_nodes: Optional[int] = None  # None = unbounded, exact enumeration.
    merge_optional: bool = True

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("search_max_nodes")
    @classmethod
    def positive_budget(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("search_max_nodes must be a positive integer")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
