"""Personal calendar: a REST event store and a month-grid client."""

# Re-export the common database helpers for convenience.
from .database import Base, Database, get_db  # noqa: F401

__all__ = ["Base", "Database", "get_db"]
