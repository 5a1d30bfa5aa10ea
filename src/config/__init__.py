"""
Configuration module for the outfit composition service.

This module provides centralized configuration management using pydantic-settings.
All environment variables and configuration values should be accessed through this module.

Usage:
    from config import get_settings

    settings = get_settings()
    pool = settings.outfit_candidate_pool_size
"""

from config.constants import DEFAULT_OUTFIT_LIMITS, OutfitLimits
from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "OutfitLimits", "DEFAULT_OUTFIT_LIMITS"]
