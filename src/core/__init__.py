"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
- Common string/gender normalisation utilities
"""

from core.logging import configure_logging, get_logger, logging_context
from core.utils import normalize_gender, normalize_string_set, normalize_text

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_context",
    "normalize_gender",
    "normalize_string_set",
    "normalize_text",
]
