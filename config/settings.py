#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management

Values are read at use time by the pipeline components, so assigning a new
value on a live Settings instance (e.g. ``settings.max_concurrent_translations = 2``)
takes effect on the next admission decision.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_MAX_CONCURRENT_TRANSLATIONS,
    DEFAULT_BATCH_MAX_SIZE,
    DEFAULT_BATCH_SEPARATOR,
    DISPLAY_MODE_REPLACE,
    PROVIDER_TIMEOUT_SECONDS,
    STATUS_POLL_INTERVAL_SECONDS,
    STATS_FILE,
    CACHE_MAX_ENTRIES,
    CACHE_TTL_SECONDS,
    API_TIMEOUT_SECONDS,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        env_prefix="TEXTBATCH_",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # ========== Scheduler ==========
    max_concurrent_translations: int = Field(default=DEFAULT_MAX_CONCURRENT_TRANSLATIONS, ge=1)

    # ========== Batching ==========
    batch_max_size: int = Field(default=DEFAULT_BATCH_MAX_SIZE, ge=1)
    batch_separator: str = Field(default=DEFAULT_BATCH_SEPARATOR, min_length=1)
    provider_timeout_sec: float = Field(default=PROVIDER_TIMEOUT_SECONDS, gt=0)

    # ========== Languages / Display ==========
    target_lang: str = "zh"
    display_mode: int = DISPLAY_MODE_REPLACE  # 0 = replace | 1 = bilingual

    # ========== Provider transport ==========
    provider_endpoint: Optional[str] = None
    provider_api_key: Optional[str] = None
    provider_request_timeout_sec: float = API_TIMEOUT_SECONDS

    # ========== Cache ==========
    cache_max_size: int = CACHE_MAX_ENTRIES
    cache_ttl_seconds: Optional[int] = CACHE_TTL_SECONDS

    # ========== Speed stats ==========
    stats_file: Path = BASE_DIR / STATS_FILE
    stats_restore_unfinished_tasks: bool = True
    status_poll_interval_sec: float = Field(default=STATUS_POLL_INTERVAL_SECONDS, gt=0)

    # ========== Logging ==========
    log_level: str = "INFO"

    def print_config(self):
        """Print configuration summary"""
        print("\n" + "=" * 70)
        print("CONFIGURATION")
        print("=" * 70)
        print(f"Max concurrent:  {self.max_concurrent_translations}")
        print(f"Batch max size:  {self.batch_max_size}")
        print(f"Target language: {self.target_lang}")
        print(f"Display mode:    {'bilingual' if self.display_mode == 1 else 'replace'}")
        print(f"Provider:        {self.provider_endpoint or '-'}")
        print(f"Timeout:         {self.provider_timeout_sec}s")
        print(f"Stats file:      {self.stats_file}")
        print("=" * 70 + "\n")


# Global settings instance
settings = Settings()
