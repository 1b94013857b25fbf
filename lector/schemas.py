"""
Pydantic models for API request/response validation.
"""

from pydantic import BaseModel

from .database import DBArticle, DBFeed, FeedItem


# ─────────────────────────────────────────────────────────────
# Feed Schemas
# ─────────────────────────────────────────────────────────────

class FeedResponse(BaseModel):
    """Subscribed feed."""
    url: str
    name: str
    added_at: int

    @classmethod
    def from_db(cls, feed: DBFeed) -> "FeedResponse":
        return cls(url=feed.url, name=feed.name, added_at=feed.added_at)


class UpsertFeedRequest(BaseModel):
    """Request to subscribe to or rename a feed."""
    url: str
    name: str
    added_at: int


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class ArticleResponse(BaseModel):
    """Stored article."""
    id: str
    feed_url: str
    feed_name: str | None
    title: str
    link: str | None
    published: str | None
    published_ts: int | None
    content: str | None
    author: str | None
    is_read: bool
    is_starred: bool
    fetched_at: int

    @classmethod
    def from_db(cls, article: DBArticle) -> "ArticleResponse":
        return cls(
            id=article.id,
            feed_url=article.feed_url,
            feed_name=article.feed_name,
            title=article.title,
            link=article.link,
            published=article.published,
            published_ts=article.published_ts,
            content=article.content,
            author=article.author,
            is_read=article.is_read,
            is_starred=article.is_starred,
            fetched_at=article.fetched_at,
        )


class UpsertArticleRequest(BaseModel):
    """Request to store a single article."""
    id: str
    feed_url: str
    feed_name: str | None = None
    title: str
    link: str | None = None
    published: str | None = None
    published_ts: int | None = None
    content: str | None = None
    author: str | None = None
    is_read: bool = False
    is_starred: bool = False
    fetched_at: int

    def to_db(self) -> DBArticle:
        return DBArticle(**self.model_dump())


class FeedItemRequest(BaseModel):
    """One fetched feed entry."""
    title: str
    link: str | None = None
    published: str | None = None
    content: str | None = None
    author: str | None = None

    def to_item(self) -> FeedItem:
        return FeedItem(**self.model_dump())


class IngestRequest(BaseModel):
    """Batch of fetched entries for one feed."""
    feed_url: str
    feed_name: str
    items: list[FeedItemRequest]


class ArticleRef(BaseModel):
    """Reference to a single article."""
    id: str


class ArticleFlagsRequest(BaseModel):
    """Request to set read and/or starred flags."""
    id: str
    is_read: bool | None = None
    is_starred: bool | None = None


class BulkMarkReadRequest(BaseModel):
    """Request to mark multiple articles as read."""
    article_ids: list[str]


# ─────────────────────────────────────────────────────────────
# Meta Schemas
# ─────────────────────────────────────────────────────────────

class MetaValue(BaseModel):
    """A single meta value."""
    key: str
    value: str


class SetMetaRequest(BaseModel):
    value: str
