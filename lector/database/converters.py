"""
Database row converters - convert SQLite rows to dataclasses, and feed
metadata to stored values.
"""

import email.utils
import sqlite3
from datetime import datetime, timezone

from .models import DBArticle, DBFeed


def row_to_feed(row: sqlite3.Row) -> DBFeed:
    """Convert a database row to a DBFeed."""
    return DBFeed(
        url=row["url"],
        name=row["name"],
        added_at=row["added_at"],
    )


def row_to_article(row: sqlite3.Row) -> DBArticle:
    """Convert a database row to a DBArticle."""
    return DBArticle(
        id=row["id"],
        feed_url=row["feed_url"],
        feed_name=row["feed_name"],
        title=row["title"],
        link=row["link"],
        published=row["published"],
        published_ts=row["published_ts"],
        content=row["content"],
        author=row["author"],
        is_read=bool(row["is_read"]),
        is_starred=bool(row["is_starred"]),
        fetched_at=row["fetched_at"],
    )


def article_id(feed_url: str, link: str | None, title: str) -> str:
    """Stable article ID derived from its feed and link (or title when no link)."""
    return f"{feed_url}::{link or title}"


def parse_published(value: str | None) -> int | None:
    """
    Normalize a source-provided date string to seconds since epoch.

    Accepts RFC 822 (RSS) and ISO 8601 (Atom) dates. Returns None when the
    value is missing or unparseable. Naive dates are taken as UTC.
    """
    if not value:
        return None

    parsed = None
    try:
        parsed = email.utils.parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())
