"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.constants import DEFAULT_OUTFIT_LIMITS


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Required environment variables:
        - SUPABASE_URL: Supabase project URL
        - SUPABASE_SERVICE_KEY: Supabase service role key

    Optional environment variables:
        - HOST: Server host (default: 0.0.0.0)
        - PORT: Server port (default: 8080)
        - CATALOG_TABLE: Catalog table name (default: products)
        - OUTFIT_*: Outfit engine limits (see config.constants.OutfitLimits)
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=4, description="Number of uvicorn workers")

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Supabase Configuration
    # ==========================================================================
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_service_key: str = Field(..., description="Supabase service role key")
    catalog_table: str = Field(default="products", description="Read-only catalog table")

    # ==========================================================================
    # Outfit Engine
    # ==========================================================================
    outfit_ranked_max_items: int = Field(
        default=DEFAULT_OUTFIT_LIMITS.RANKED_MAX_ITEMS,
        ge=1,
        description="Total item cap for ranked outfits"
    )
    outfit_ranked_items_per_slot: int = Field(
        default=DEFAULT_OUTFIT_LIMITS.RANKED_ITEMS_PER_SLOT,
        ge=1,
        description="Picks per slot for ranked outfits"
    )
    outfit_sampled_role_limits: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_OUTFIT_LIMITS.SAMPLED_ROLE_LIMITS),
        description="Per-role pick limits for sampled outfits"
    )
    outfit_candidate_pool_size: int = Field(
        default=DEFAULT_OUTFIT_LIMITS.CANDIDATE_POOL_SIZE,
        ge=1,
        description="Rows in the pool a sampled slot draws from (ranked slots read every match)"
    )
    outfit_fallback_extra: int = Field(
        default=DEFAULT_OUTFIT_LIMITS.FALLBACK_EXTRA,
        ge=0,
        description="Extra pool size used by the exclusion-relaxed stage"
    )
    outfit_request_timeout_seconds: float = Field(
        default=DEFAULT_OUTFIT_LIMITS.REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Budget for all catalog calls of one outfit request (seconds)"
    )

    @field_validator("outfit_sampled_role_limits", mode="before")
    @classmethod
    def parse_role_limits(cls, v):
        # Accepts JSON ('{"Top": 3}') or 'Top=3,Bottom=2'
        if isinstance(v, str):
            text = v.strip()
            if text.startswith("{"):
                return json.loads(text)
            limits: Dict[str, int] = {}
            for chunk in text.split(","):
                if "=" not in chunk:
                    continue
                role, _, value = chunk.partition("=")
                limits[role.strip()] = int(value.strip())
            return limits
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "supabase_url": "https://test.supabase.co",
        "supabase_service_key": "test-key",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(**test_defaults)
