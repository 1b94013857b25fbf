"""
Database models - dataclasses for database entities.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass
class DBFeed:
    url: str
    name: str
    added_at: int  # seconds since epoch


@dataclass
class DBArticle:
    id: str
    feed_url: str
    feed_name: str | None  # Feed name at fetch time, may differ from the live feed
    title: str
    link: str | None = None
    published: str | None = None  # Date string as given by the source
    published_ts: int | None = None
    content: str | None = None
    author: str | None = None
    is_read: bool = False
    is_starred: bool = False
    fetched_at: int = 0


@dataclass
class FeedItem:
    """A single entry handed over by the feed fetcher for ingestion."""
    title: str
    link: str | None = None
    published: str | None = None
    content: str | None = None
    author: str | None = None


class ArticleFilter(str, Enum):
    ALL = "all"
    UNREAD = "unread"
    STARRED = "starred"
