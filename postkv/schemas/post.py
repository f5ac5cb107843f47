"""
Post schemas.

Defines the metadata record stored alongside each post, the post view
returned by queries, category summaries, and the sync payload.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Visibility(str, Enum):
    """Storage slot a read or write targets."""

    DRAFT = "draft"
    PUBLISHED = "published"

    @classmethod
    def from_param(cls, value: str | None, default: "Visibility") -> "Visibility":
        """
        Resolve a request parameter to a visibility.

        Query strings pass "draft" to read drafts and default to published;
        sync payloads pass "published" to publish and default to draft.

        Args:
            value: Raw parameter value (may be None)
            default: Visibility used unless value names the other slot

        Returns:
            Resolved visibility
        """
        other = cls.PUBLISHED if default is cls.DRAFT else cls.DRAFT
        return other if value == other.value else default


class PostMetadata(BaseModel):
    """Metadata record stored under metadata:{visibility}:{key}."""

    title: str = Field(..., description="Post title")
    date: str = Field(..., description="Publication date, YYYY-MM-DD")
    author: str = Field(..., description="Post author")
    status: Literal["draft", "published"] = Field(
        default="draft", description="Status label declared by the author"
    )
    category: str = Field(..., description="Category name")
    excerpt: str | None = Field(None, description="Short summary")
    tags: list[str] | None = Field(None, description="Tags in declaration order")
    language: str | None = Field(None, description="Language code")

    @field_validator("title", "date", "author", "category")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure required fields are not empty or whitespace only."""
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> str:
        """Anything other than "published" (case-insensitive) is a draft."""
        if isinstance(v, str) and v.strip().lower() == "published":
            return "published"
        return "draft"

    def to_json(self) -> str:
        """Serialize for storage, omitting absent optional fields."""
        return self.model_dump_json(exclude_none=True)


class Post(BaseModel):
    """Full post view returned by point lookups and listings."""

    slug: str = Field(..., description="Last segment of the logical key")
    metadata: PostMetadata
    content: str = Field(..., description="Raw markdown including front matter")


class CategoryInfo(BaseModel):
    """Summary of one category's published index."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Category name without language prefix")
    post_count: int = Field(..., alias="postCount", description="Number of indexed slugs")
    posts: list[str] = Field(default_factory=list, description="Slugs in publish order")


class SyncPayload(BaseModel):
    """Request body for the sync write path."""

    key: str | None = Field(None, description="Logical key, e.g. en/tech/my-post")
    content: str | None = Field(None, description="Raw markdown content")
    metadata: dict[str, Any] | None = Field(
        None, description="Explicit metadata; extracted from front matter when absent"
    )
    status: str | None = Field(
        None, description="'published' to publish, anything else stores a draft"
    )
