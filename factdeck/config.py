"""
Configuration settings for factdeck.

Uses Pydantic Settings for environment variable management with .env file support.
Every field can be overridden with a FACTDECK_ prefixed environment variable.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FACTDECK_",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Deck Window
    # ========================================
    visible_cards: int = Field(
        default=5,
        ge=1,
        description="Maximum number of cards in the visible window",
    )
    max_fan_depth: int = Field(
        default=4,
        ge=0,
        description="Deepest displayed stack depth (fan offset clamp)",
    )

    # ========================================
    # Content Queue
    # ========================================
    prime_timeout_seconds: float = Field(
        default=1.2,
        description="Budget for the instant-paint batch fetch",
    )
    provider_timeout_seconds: float = Field(
        default=3.5,
        description="Budget for a single provider call",
    )
    default_batch_count: int = Field(default=12, ge=0)
    startup_fill_count: int = Field(default=12, ge=0)
    reshuffle_fill_count: int = Field(default=10, ge=0)
    replenish_fill_count: int = Field(default=8, ge=0)

    # ========================================
    # Persistence
    # ========================================
    cache_capacity: int = Field(
        default=40,
        ge=1,
        description="Cached facts kept per category (newest last)",
    )
    cache_db_path: Path = Field(
        default=Path.home() / ".factdeck" / "cache.db",
        description="SQLite file holding cached facts and the last subject",
    )

    # ========================================
    # Gestures & Animation
    # ========================================
    swipe_threshold_px: float = Field(
        default=120.0,
        description="Horizontal drag distance that commits a swipe",
    )
    rotation_per_px: float = Field(default=0.06)
    exit_rotation_deg: float = Field(default=30.0)
    viewport_width_px: float = Field(
        default=1280.0,
        description="Distance a committed card travels off-screen",
    )
    exit_duration_ms: int = Field(default=220, ge=0)
    spring_back_duration_ms: int = Field(default=200, ge=0)

    # ========================================
    # Text Clamp
    # ========================================
    clamp_lines: int = Field(
        default=8,
        ge=1,
        description="Lines shown before a fact is truncated",
    )
    long_text_chars: int = Field(default=280, ge=0)
    text_width_chars: int = Field(
        default=48,
        ge=8,
        description="Card text column width used for overflow measurement",
    )

    # ========================================
    # Content Sources
    # ========================================
    wikipedia_api_url: str = Field(default="https://en.wikipedia.org/w/api.php")
    wikipedia_rest_url: str = Field(default="https://en.wikipedia.org/api/rest_v1")
    wikipedia_page_url: str = Field(default="https://en.wikipedia.org/wiki")
    catfact_url: str = Field(default="https://catfact.ninja/fact")
    category_member_limit: int = Field(default=50, ge=1)
    http_timeout_seconds: float = Field(default=3.5)

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(default="WARNING")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
