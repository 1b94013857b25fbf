"""
Lector Store

Persistence layer for the Lector feed reader: versioned SQLite schema
migrations, feed/article/meta storage, and the HTTP bridge the host shell
uses to reach it.
"""

__version__ = "1.0.0"
