"""
Core utilities and infrastructure for the pet companion engine.
"""

from core.exceptions import (
    CompanionException,
    DatabaseException,
    MemoryException,
    ClassifierUnavailableError,
    GenerationError,
    GenerationAuthError,
    GenerationRateLimitError,
    GenerationTimeoutError,
    ValidationException,
    InvalidInputError,
    ConfigurationError,
)
from core.logging_config import configure_logging, get_logger
from core.background import BackgroundTaskRunner

__all__ = [
    "CompanionException",
    "DatabaseException",
    "MemoryException",
    "ClassifierUnavailableError",
    "GenerationError",
    "GenerationAuthError",
    "GenerationRateLimitError",
    "GenerationTimeoutError",
    "ValidationException",
    "InvalidInputError",
    "ConfigurationError",
    "configure_logging",
    "get_logger",
    "BackgroundTaskRunner",
]
