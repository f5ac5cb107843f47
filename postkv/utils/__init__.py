"""Utilities package."""

from postkv.utils.file_helpers import extract_metadata, parse_front_matter
from postkv.utils.keyspace import (
    CATALOG_KEY,
    build_logical_key,
    category_index_key,
    content_key,
    metadata_key,
    parse_logical_key,
)

__all__ = [
    "extract_metadata",
    "parse_front_matter",
    "CATALOG_KEY",
    "build_logical_key",
    "category_index_key",
    "content_key",
    "metadata_key",
    "parse_logical_key",
]
