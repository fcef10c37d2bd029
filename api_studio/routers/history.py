"""
History record API routes.

History records are created by the execution route; these endpoints only
read them.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..exceptions import ResourceNotFoundError
from ..models.history import HistoryRecord
from ..schemas.history import HistoryEntry, HistoryListResponse
from ..services.history_service import list_history, to_entry


router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=HistoryListResponse)
def get_history_list(
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db)
):
    """
    Get history records ordered by execution time (newest first).

    Args:
        limit: Maximum number of records; defaults to the configured history_limit
        db: Database session

    Returns:
        HistoryListResponse with ``success`` and the entries
    """
    records = list_history(db, limit or get_settings().history_limit)
    return HistoryListResponse(success=True, history=[to_entry(r) for r in records])


@router.get("/{history_id}", response_model=HistoryEntry)
def get_history_entry(history_id: int, db: Session = Depends(get_db)):
    """
    Get a single history record by ID.

    Raises:
        ResourceNotFoundError: 404 if the record does not exist
    """
    record = db.query(HistoryRecord).filter(HistoryRecord.id == history_id).first()
    if record is None:
        raise ResourceNotFoundError("History record", history_id)
    return to_entry(record)
