"""
Custom exception classes for the indexing and query core.

These exceptions describe what went wrong in domain terms only. The HTTP
layer (postkv.middleware.error_handler) maps them to status codes.
"""

from typing import Any


class PostKVError(Exception):
    """Base exception class for all postkv errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidContentError(PostKVError):
    """Raised when a document has no usable metadata. No store write has happened."""

    def __init__(
        self,
        message: str = "Invalid markdown: missing required frontmatter",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, details=details)


class NotFoundError(PostKVError):
    """Raised when a post, its metadata, or a category doesn't exist."""

    def __init__(self, resource: str, identifier: str | None = None) -> None:
        self.resource = resource
        self.identifier = identifier
        details = {"identifier": identifier} if identifier else None
        super().__init__(message=f"{resource} not found", details=details)


class StoreUnavailableError(PostKVError):
    """Raised when a key-value store call fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=f"Store unavailable: {message}", details=details)


class MalformedQueryError(PostKVError):
    """Raised when a required request parameter is missing or unusable."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, details=details)
