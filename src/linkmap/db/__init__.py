"""Database layer for linkmap (SQLAlchemy 2.0 async)."""

from __future__ import annotations

from linkmap.db.base import Base
from linkmap.db.engine import DatabaseManager

__all__ = ["Base", "DatabaseManager"]
