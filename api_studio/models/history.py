"""
History model for storing executed request records.

Each execution, including one that failed at the transport level, creates a
history record with the request as sent and the normalized result.
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, JSON, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryRecord(Base):
    """
    SQLAlchemy model for request execution history.

    Attributes:
        id: Unique identifier for the history entry
        method: HTTP method used
        url: Target URL
        headers: Effective headers of the request
        body: Request body as composed (kept even when not transmitted)
        body_type: Body encoding (raw, form-data, urlencoded)
        status: Response status code, 0 for a network error
        status_text: Response reason phrase or "Network Error"
        response_data: Response body or error description
        response_time_ms: Execution time in milliseconds
        response_headers: Headers received in the response
        created_at: Timestamp when the request completed
    """
    __tablename__ = "history"

    id: Mapped[int] = mapped_column(primary_key=True)
    method: Mapped[str] = mapped_column(String(10))
    url: Mapped[str] = mapped_column(Text)
    headers: Mapped[dict] = mapped_column(JSON, default=dict)
    body: Mapped[str] = mapped_column(Text, default="")
    body_type: Mapped[str] = mapped_column(String(20), default="raw")
    status: Mapped[int] = mapped_column(Integer)
    status_text: Mapped[str] = mapped_column(String(100))
    response_data: Mapped[str] = mapped_column(Text, default="")
    response_time_ms: Mapped[int] = mapped_column(Integer, default=0)
    response_headers: Mapped[dict] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(default=_utcnow)
