"""Shared utilities for text translation.

This module provides the configuration object, configuration errors and the
correlation-aware logging helpers used across all layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    TranslationConfig,
    TranslationMode,
    UnescapeOption,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "TranslationConfig",
    "TranslationMode",
    "UnescapeOption",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
