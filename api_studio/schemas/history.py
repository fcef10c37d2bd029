"""
Pydantic schemas for request execution history.

Defines the history entry shape and the list envelope returned by
``GET /api/history``.
"""

from datetime import datetime

from .request import WireModel, HttpMethod, BodyType
from .response import ResponseResult


class HistoryEntry(WireModel):
    """A recorded request/response pair. Created by the history service only."""
    id: int | str
    method: HttpMethod
    url: str
    headers: dict[str, str] = {}
    body: str = ""
    body_type: BodyType = "raw"
    response: ResponseResult
    created_at: datetime


class HistoryListResponse(WireModel):
    """Envelope for the history list."""
    success: bool
    history: list[HistoryEntry] = []
