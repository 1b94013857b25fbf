"""
One-time import of the reader's pre-database storage.

Older releases kept everything in browser storage. The host shell dumps that
storage to a JSON file with the keys below; this module moves it into the
store once and records that it did so in the meta table.
"""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from .database import DBArticle, DBFeed, Store
from .database.converters import parse_published

logger = logging.getLogger(__name__)

MIGRATED_KEY = "migrated_from_localstorage"

FEEDS_KEY = "rss-feeds"
ARTICLES_KEY = "rss-articles"
READ_KEY = "rss-read"
STARRED_KEY = "rss-starred"


class LegacyImportError(Exception):
    """The legacy export exists but cannot be read."""


def _parse_added_at(value, default: int) -> int:
    # Older exports stored Date.now(), i.e. epoch milliseconds
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value // 1000)
    if not value or not isinstance(value, str):
        return default
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return default
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def load_export(path: Path) -> dict:
    """Read the legacy JSON export. A missing file is an empty export."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise LegacyImportError(f"Cannot read legacy export {path}: {e}") from e
    if not isinstance(data, dict):
        raise LegacyImportError(f"Legacy export {path} is not a JSON object")
    return data


def _convert(
    legacy_feeds: list[dict],
    legacy_articles: list[dict],
    read: dict,
    starred: dict,
    now: int,
) -> tuple[list[DBFeed], list[DBArticle]]:
    feeds = [
        DBFeed(
            url=f["url"],
            name=f.get("name") or f["url"],
            added_at=_parse_added_at(f.get("addedAt"), now),
        )
        for f in legacy_feeds
    ]
    articles = [
        DBArticle(
            id=a["id"],
            feed_url=a["feedUrl"],
            feed_name=a.get("feedName"),
            title=a.get("title") or "",
            link=a.get("link"),
            published=a.get("published"),
            published_ts=parse_published(a.get("published")),
            content=a.get("content"),
            author=a.get("author"),
            is_read=bool(read.get(a["id"])),
            is_starred=bool(starred.get(a["id"])),
            fetched_at=now,
        )
        for a in legacy_articles
    ]
    return feeds, articles


def import_legacy_if_needed(store: Store, path: Path) -> bool:
    """
    Import the legacy export into the store unless that already happened.

    Existing feeds and articles are never overwritten. Articles whose feed
    is unknown are skipped. Returns True if an import ran in this call.
    """
    if store.get_meta(MIGRATED_KEY) == "1":
        return False

    data = load_export(path)
    now = int(time.time())
    try:
        feeds, articles = _convert(
            data.get(FEEDS_KEY) or [],
            data.get(ARTICLES_KEY) or [],
            data.get(READ_KEY) or {},
            data.get(STARRED_KEY) or {},
            now,
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise LegacyImportError(f"Malformed legacy export {path}: {e!r}") from e

    feeds_added, articles_added = store.imports.import_all(feeds, articles, MIGRATED_KEY)
    skipped = len(articles) - articles_added
    logger.info(
        f"Imported legacy data: {feeds_added} feeds, {articles_added} articles"
        + (f" ({skipped} not imported)" if skipped else "")
    )
    return True
