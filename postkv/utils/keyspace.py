"""
Storage key derivation.

Maps a logical post identity (language/category/slug plus visibility)
to the flat keys used in the key-value store. The layout is shared with
existing deployments and must not change:

    {visibility}:{key}                  raw markdown
    metadata:{visibility}:{key}         JSON metadata
    index:{language}/{category}         JSON array of slugs
    index:categories                    JSON array of language/category
"""

from typing import NamedTuple

from postkv.schemas.post import Visibility

CATALOG_KEY = "index:categories"
KEY_SEPARATOR = "/"


class LogicalKey(NamedTuple):
    """A logical key with exactly three segments."""

    language: str
    category: str
    slug: str

    @property
    def category_path(self) -> str:
        return category_path(self.language, self.category)

    def __str__(self) -> str:
        return KEY_SEPARATOR.join(self)


def _slot(visibility: Visibility | str) -> str:
    return Visibility(visibility).value


def content_key(visibility: Visibility | str, logical_key: str) -> str:
    """Key holding the raw markdown for a post."""
    return f"{_slot(visibility)}:{logical_key}"


def metadata_key(visibility: Visibility | str, logical_key: str) -> str:
    """Key holding the JSON metadata for a post."""
    return f"metadata:{_slot(visibility)}:{logical_key}"


def category_path(language: str, category: str) -> str:
    """Composite language/category entry used in the catalog."""
    return f"{language}{KEY_SEPARATOR}{category}"


def category_index_key(language: str, category: str) -> str:
    """Key holding the slug index for one category."""
    return f"index:{category_path(language, category)}"


def build_logical_key(language: str, category: str, slug: str) -> str:
    return str(LogicalKey(language, category, slug))


def parse_logical_key(logical_key: str) -> LogicalKey | None:
    """
    Split a logical key into language, category and slug.

    Only keys with exactly three non-empty segments are indexable;
    anything else returns None and is stored without index entries.

    Example:
        >>> parse_logical_key("en/tech/my-post")
        LogicalKey(language='en', category='tech', slug='my-post')
        >>> parse_logical_key("tech/my-post") is None
        True
    """
    parts = logical_key.split(KEY_SEPARATOR)
    if len(parts) != 3 or not all(parts):
        return None
    return LogicalKey(*parts)


def split_category_path(path: str) -> tuple[str, str]:
    """Split a catalog entry into (language, category)."""
    language, _, category = path.partition(KEY_SEPARATOR)
    return language, category
