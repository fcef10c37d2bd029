# Session client package

from .headers import HeaderList
from .request import RequestSpec
from .response import ResponseModel, StatusClass, classify_status, format_time, pretty_json
from .gateway import ExecutionGateway
from .history import HistoryCache, request_from_history
from .session import SessionController, SessionState

__all__ = [
    "HeaderList",
    "RequestSpec",
    "ResponseModel",
    "StatusClass",
    "classify_status",
    "format_time",
    "pretty_json",
    "ExecutionGateway",
    "HistoryCache",
    "request_from_history",
    "SessionController",
    "SessionState",
]
