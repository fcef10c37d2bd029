"""
History service for saving and listing request execution records.
"""

from sqlalchemy.orm import Session

from ..models.history import HistoryRecord
from ..schemas.history import HistoryEntry
from ..schemas.request import RequestPayload
from ..schemas.response import ResponseResult


def save_history(
    db: Session,
    request: RequestPayload,
    response: ResponseResult,
) -> HistoryRecord:
    """
    Save a request execution to history.

    Args:
        db: Database session
        request: The executed request payload
        response: The normalized result, including network error sentinels

    Returns:
        The created history record
    """
    record = HistoryRecord(
        method=request.method,
        url=request.url,
        headers=dict(request.headers),
        body=request.body,
        body_type=request.body_type,
        status=response.status,
        status_text=response.status_text,
        response_data=response.data,
        response_time_ms=response.time,
        response_headers=dict(response.headers),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def list_history(db: Session, limit: int) -> list[HistoryRecord]:
    """Return up to ``limit`` records, newest first."""
    return (
        db.query(HistoryRecord)
        .order_by(HistoryRecord.created_at.desc(), HistoryRecord.id.desc())
        .limit(limit)
        .all()
    )


def to_entry(record: HistoryRecord) -> HistoryEntry:
    """Convert a stored record into its wire shape."""
    return HistoryEntry(
        id=record.id,
        method=record.method,
        url=record.url,
        headers=record.headers or {},
        body=record.body or "",
        body_type=record.body_type or "raw",
        response=ResponseResult(
            status=record.status,
            status_text=record.status_text,
            data=record.response_data or "",
            time=record.response_time_ms,
            headers=record.response_headers or {},
        ),
        created_at=record.created_at,
    )
