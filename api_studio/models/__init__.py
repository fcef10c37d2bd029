"""
Models package for the history service.

Exports all SQLAlchemy models for database operations.
"""

from .history import HistoryRecord

__all__ = [
    "HistoryRecord",
]
