"""
Custom exception hierarchy for the pet companion engine.
Provides structured error handling with proper context.

Each exception carries a coarse ``status`` so callers can tell configuration,
validation, upstream-auth, upstream-rate-limit and generic failures apart.
"""

from typing import Optional, Dict, Any


class CompanionException(Exception):
    """Base exception for all companion engine errors."""

    status: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize exception with message and optional context.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "status": self.status,
            "context": self.context,
        }


# ==================== Database Exceptions ====================


class DatabaseException(CompanionException):
    """Base exception for database-related errors."""

    pass


# ==================== Memory Exceptions ====================


class MemoryException(CompanionException):
    """Base exception for memory-store errors. Never surfaced to the user."""

    pass


# ==================== Classification Exceptions ====================


class ClassifierUnavailableError(CompanionException):
    """Raised when the emotion classifier backend cannot produce a result."""

    def __init__(self, details: Optional[str] = None):
        super().__init__(
            message="Emotion classifier unavailable",
            error_code="CLASSIFIER_UNAVAILABLE",
            context={"details": details} if details else {},
        )


# ==================== Generation Service Exceptions ====================


class GenerationError(CompanionException):
    """Generic generation service failure."""

    status = 502

    def __init__(self, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(
            message="Failed to generate a reply",
            error_code="GENERATION_ERROR",
            context={"status_code": status_code, "details": details},
        )


class GenerationAuthError(GenerationError):
    """Raised when the generation service rejects our credentials."""

    status = 401

    def __init__(self, details: Optional[str] = None):
        CompanionException.__init__(
            self,
            message="Generation service authentication failed",
            error_code="GENERATION_AUTH_ERROR",
            context={"details": details} if details else {},
        )


class GenerationRateLimitError(GenerationError):
    """Raised when the generation service throttles us. Retrying is the caller's call."""

    status = 429

    def __init__(self, details: Optional[str] = None):
        CompanionException.__init__(
            self,
            message="Generation service rate limit exceeded, try again later",
            error_code="GENERATION_RATE_LIMITED",
            context={"details": details} if details else {},
        )


class GenerationTimeoutError(GenerationError):
    """Raised when the reply generation exceeds its time budget."""

    status = 504

    def __init__(self, timeout_seconds: float):
        CompanionException.__init__(
            self,
            message=f"Generation timed out after {timeout_seconds}s",
            error_code="GENERATION_TIMEOUT",
            context={"timeout_seconds": timeout_seconds},
        )


# ==================== Validation Exceptions ====================


class ValidationException(CompanionException):
    """Base exception for validation errors."""

    status = 400


class InvalidInputError(ValidationException):
    """Raised when input validation fails."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Invalid input: {field} - {reason}",
            error_code="INVALID_INPUT",
            context={"field": field, "reason": reason},
        )


class ConfigurationError(ValidationException):
    """Raised when configuration is invalid."""

    status = 500

    def __init__(self, setting: str, reason: str):
        super().__init__(
            message=f"Invalid configuration: {setting} - {reason}",
            error_code="CONFIGURATION_ERROR",
            context={"setting": setting, "reason": reason},
        )
