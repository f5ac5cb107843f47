"""Pydantic schemas package for request/response validation."""

from postkv.schemas.common import APIResponse, HealthStatus, SyncResult
from postkv.schemas.post import (
    CategoryInfo,
    Post,
    PostMetadata,
    SyncPayload,
    Visibility,
)

__all__ = [
    # Common schemas
    "APIResponse",
    "HealthStatus",
    "SyncResult",
    # Post schemas
    "CategoryInfo",
    "Post",
    "PostMetadata",
    "SyncPayload",
    "Visibility",
]
