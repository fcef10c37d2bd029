"""
Pydantic schemas package.

Exports the wire shapes shared by the session client and the service.
"""

from .request import (
    HttpMethod,
    BODY_METHODS,
    BodyType,
    WireModel,
    HeaderEntry,
    RequestPayload,
)

from .response import (
    NETWORK_ERROR_STATUS,
    NETWORK_ERROR_TEXT,
    ResponseResult,
)

from .execute import ExecuteReply

from .history import (
    HistoryEntry,
    HistoryListResponse,
)

__all__ = [
    # Request schemas
    "HttpMethod",
    "BODY_METHODS",
    "BodyType",
    "WireModel",
    "HeaderEntry",
    "RequestPayload",
    # Response schemas
    "NETWORK_ERROR_STATUS",
    "NETWORK_ERROR_TEXT",
    "ResponseResult",
    # Execute schemas
    "ExecuteReply",
    # History schemas
    "HistoryEntry",
    "HistoryListResponse",
]
