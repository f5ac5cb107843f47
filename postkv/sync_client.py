"""
Content sync client.

Walks a local content tree (``content/{language}/{category}/{slug}.md``)
and pushes every post to a running service through ``POST /sync``.
The visibility slot comes from each file's ``status`` front matter
unless forced on the command line.
"""

import argparse
import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path

import frontmatter
import httpx

from postkv.core.logging import get_logger, setup_logging
from postkv.schemas.post import Visibility

logger = get_logger(__name__)

DEFAULT_URL = "http://localhost:8787"
DEFAULT_CONTENT_DIR = "content"


@dataclass
class ContentFile:
    """A markdown post found on disk."""

    path: Path
    key: str
    content: str
    status: Visibility


@dataclass
class SyncReport:
    """Outcome of a sync run."""

    synced: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def key_for(path: Path, content_dir: Path) -> str:
    """
    Derive the logical key of a post from its path.

    Example:
        >>> key_for(Path("content/en/tech/my-post.md"), Path("content"))
        'en/tech/my-post'
    """
    relative = path.relative_to(content_dir).with_suffix("")
    return relative.as_posix()


def status_for(content: str) -> Visibility:
    """
    Read the visibility slot from a post's front matter.

    Anything but ``status: published`` syncs as a draft, including
    files whose front matter can't be parsed.
    """
    try:
        post = frontmatter.loads(content)
    except Exception as e:
        logger.warning(f"Failed to parse frontmatter: {e}")
        return Visibility.DRAFT

    status = str(post.metadata.get("status", "")).strip().lower()
    return Visibility.PUBLISHED if status == Visibility.PUBLISHED.value else Visibility.DRAFT


def discover_content(content_dir: Path, status: Visibility | None = None) -> list[ContentFile]:
    """
    Find all markdown posts under a directory.

    Args:
        content_dir: Root of the content tree
        status: Force every post into this slot instead of reading front matter

    Returns:
        Posts sorted by key
    """
    files = []
    for path in sorted(content_dir.rglob("*.md")):
        if not path.is_file():
            continue
        content = path.read_text(encoding="utf-8")
        files.append(
            ContentFile(
                path=path,
                key=key_for(path, content_dir),
                content=content,
                status=status or status_for(content),
            )
        )
    return files


async def sync_files(
    files: list[ContentFile],
    url: str = DEFAULT_URL,
    client: httpx.AsyncClient | None = None,
) -> SyncReport:
    """
    Push posts to the sync endpoint one by one.

    A failing post is recorded and the run continues.

    Args:
        files: Posts to push
        url: Service base URL
        client: HTTP client to reuse (tests pass an ASGI-backed client)

    Returns:
        Report of synced and failed keys
    """
    report = SyncReport()
    owns_client = client is None
    client = client or httpx.AsyncClient(base_url=url, timeout=30.0)

    try:
        for file in files:
            try:
                response = await client.post(
                    "/sync",
                    json={"key": file.key, "content": file.content, "status": file.status.value},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                report.failed[file.key] = f"HTTP {e.response.status_code}: {e.response.text}"
                logger.error(f"Failed to sync {file.key}: {report.failed[file.key]}")
                continue
            except httpx.HTTPError as e:
                report.failed[file.key] = str(e)
                logger.error(f"Failed to sync {file.key}: {e}")
                continue

            report.synced.append(file.key)
            logger.info(f"Synced: {file.key} ({file.status.value})")
    finally:
        if owns_client:
            await client.aclose()

    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync markdown posts to a postkv service")
    parser.add_argument(
        "--content-dir",
        default=os.environ.get("CONTENT_DIR", DEFAULT_CONTENT_DIR),
        help="Root of the content tree (default: $CONTENT_DIR or ./content)",
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("WORKER_URL", DEFAULT_URL),
        help="Service base URL (default: $WORKER_URL or http://localhost:8787)",
    )
    parser.add_argument(
        "--status",
        choices=[v.value for v in Visibility],
        default=None,
        help="Force every post into this slot instead of reading front matter",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level for this run (default: $LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command line entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    content_dir = Path(args.content_dir)
    if not content_dir.is_dir():
        logger.error(f"Content directory not found: {content_dir}")
        return 1

    files = discover_content(content_dir, Visibility(args.status) if args.status else None)
    logger.info(f"Found {len(files)} markdown files in {content_dir}, syncing to {args.url}")
    if not files:
        return 0

    report = asyncio.run(sync_files(files, args.url))
    logger.info(f"Sync complete: {len(report.synced)} synced, {len(report.failed)} failed")
    return 0 if report.ok else 1
