"""
Schema generations.

Each generation is the DDL that brings a database from the previous version to
this one. Statements are guarded with IF NOT EXISTS so replaying a generation
against a database that already has it is a no-op.

Published generations are never edited. Fixing a mistake means adding a new
generation, because deployed databases decide what has been applied by version
number alone.
"""

import sqlite3
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class SchemaGeneration:
    version: int
    description: str
    sql: str


GENERATIONS: tuple[SchemaGeneration, ...] = (
    SchemaGeneration(
        version=1,
        description="create_initial_tables",
        sql="""
            CREATE TABLE IF NOT EXISTS feeds (
                url TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                added_at INTEGER NOT NULL
            );

            CREATE TABLE IF NOT EXISTS articles (
                id TEXT PRIMARY KEY,
                feed_url TEXT NOT NULL REFERENCES feeds(url) ON DELETE CASCADE,
                feed_name TEXT,
                title TEXT NOT NULL,
                link TEXT,
                published TEXT,
                published_ts INTEGER,
                content TEXT,
                author TEXT,
                is_read INTEGER NOT NULL DEFAULT 0,
                is_starred INTEGER NOT NULL DEFAULT 0,
                fetched_at INTEGER NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_articles_feed_url ON articles(feed_url);
            CREATE INDEX IF NOT EXISTS idx_articles_published_ts ON articles(published_ts);
            CREATE INDEX IF NOT EXISTS idx_articles_starred ON articles(is_starred);

            CREATE TABLE IF NOT EXISTS meta (
                key TEXT PRIMARY KEY,
                value TEXT
            );
        """,
    ),
)


def split_statements(sql: str) -> Iterator[str]:
    """
    Split a DDL/DML payload into complete statements.

    Uses sqlite3.complete_statement so semicolons inside trigger bodies
    or string literals do not end a statement early.
    """
    buffer = ""
    for piece in sql.split(";"):
        buffer += piece + ";"
        if sqlite3.complete_statement(buffer):
            statement = buffer.strip()
            buffer = ""
            if statement != ";":
                yield statement
    # Trailing text without a terminating semicolon
    remainder = buffer[:-1].strip()
    if remainder:
        yield remainder
