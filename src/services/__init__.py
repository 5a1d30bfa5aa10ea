"""
Services module for business logic.

Provides the outfit composition engine.
"""

from services.outfit_engine import OutfitEngine, get_outfit_engine

__all__ = [
    "OutfitEngine",
    "get_outfit_engine",
]
