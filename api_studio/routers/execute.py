"""
Request execution API routes.

``POST /api/request`` is the only execution path for session clients. Every
execution is recorded in history, including transport failures.
"""

import httpx
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.execute import ExecuteReply
from ..schemas.request import RequestPayload
from ..services.http_executor import execute_request
from ..services.history_service import save_history


router = APIRouter(prefix="/api/request", tags=["execute"])


def get_outbound_transport() -> httpx.AsyncBaseTransport | None:
    """
    Dependency providing the transport for outbound calls.

    None selects httpx's default network transport; tests override this.
    """
    return None


@router.post("", response_model=ExecuteReply)
async def execute(
    payload: RequestPayload,
    db: Session = Depends(get_db),
    transport: httpx.AsyncBaseTransport | None = Depends(get_outbound_transport),
):
    """
    Execute an HTTP request on the caller's behalf.

    Args:
        payload: Method, URL, effective headers, body and body type
        db: Database session
        transport: Outbound httpx transport

    Returns:
        ExecuteReply wrapping the normalized result; network failures come
        back as status 0 with a 200 reply so clients can render them
    """
    result = await execute_request(payload, transport=transport)
    save_history(db=db, request=payload, response=result)
    return ExecuteReply(response=result)
