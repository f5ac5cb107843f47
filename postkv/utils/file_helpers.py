"""
Front matter processing utilities.

Parses the metadata header at the top of a markdown post. The format is
small: a line of exactly ``---``, ``key: value`` lines, and a closing
``---`` line. Nested structures, multi-line values and
escaping are not supported; values are kept verbatim apart from
surrounding whitespace (quotes and brackets are not stripped).
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pydantic import ValidationError

from postkv.core.config import settings
from postkv.core.logging import get_logger
from postkv.schemas.post import PostMetadata

logger = get_logger(__name__)

FRONT_MATTER_PATTERN = re.compile(r"\A---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
CALENDAR_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

REQUIRED_FIELDS = ("title", "date", "author", "category")
KNOWN_FIELDS = frozenset(
    {"title", "date", "author", "status", "category", "excerpt", "tags", "language"}
)


@dataclass
class FrontMatter:
    """Result of parsing a post header, field by field."""

    found: bool
    fields: dict[str, Any] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)
    invalid: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.found and not self.missing and not self.invalid


def is_calendar_date(value: str) -> bool:
    """
    Check that value is a real YYYY-MM-DD date.

    Example:
        >>> is_calendar_date("2025-02-30")
        False
    """
    if not CALENDAR_DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _parse_value(name: str, value: str) -> Any:
    if name == "status":
        return "published" if value.lower() == "published" else "draft"
    if name == "tags":
        return [tag.strip() for tag in value.split(",")]
    return value


def parse_front_matter(content: str, strict_dates: bool | None = None) -> FrontMatter:
    """
    Parse the front matter block at the start of content.

    Args:
        content: Raw markdown post
        strict_dates: Require YYYY-MM-DD dates, defaults to
            settings.STRICT_DATE_VALIDATION

    Returns:
        FrontMatter with recognized fields and any missing/invalid ones.
        ``found`` is False when the content has no header at all.
    """
    if strict_dates is None:
        strict_dates = settings.STRICT_DATE_VALIDATION

    match = FRONT_MATTER_PATTERN.match(content)
    if not match:
        return FrontMatter(found=False)

    fields: dict[str, Any] = {}
    for line in match.group(1).splitlines():
        key, sep, value = line.partition(":")
        if not sep or not key:
            continue
        name = key.strip().lower()
        if name not in KNOWN_FIELDS:
            continue
        fields[name] = _parse_value(name, value.strip())

    result = FrontMatter(found=True, fields=fields)
    result.missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]

    if strict_dates and fields.get("date") and not is_calendar_date(fields["date"]):
        result.invalid["date"] = "expected YYYY-MM-DD"

    return result


def extract_metadata(content: str, strict_dates: bool | None = None) -> PostMetadata | None:
    """
    Extract post metadata from front matter.

    Args:
        content: Raw markdown post
        strict_dates: See parse_front_matter

    Returns:
        PostMetadata, or None when there is no header or a required
        field is missing or invalid

    Example:
        >>> content = "---\\ntitle: Hi\\ndate: 2025-01-01\\nauthor: Me\\ncategory: tech\\n---\\nBody"
        >>> extract_metadata(content).title
        'Hi'
    """
    front_matter = parse_front_matter(content, strict_dates)
    if not front_matter.found:
        return None
    if not front_matter.is_valid:
        logger.debug(
            f"Rejected front matter: missing={front_matter.missing} "
            f"invalid={list(front_matter.invalid)}"
        )
        return None

    try:
        return PostMetadata(**front_matter.fields)
    except ValidationError as e:
        logger.debug(f"Front matter failed validation: {e}")
        return None
