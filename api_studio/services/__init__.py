# Services package

from .http_executor import build_request_kwargs, execute_request, parse_form_pairs
from .history_service import list_history, save_history, to_entry

__all__ = [
    "build_request_kwargs",
    "execute_request",
    "parse_form_pairs",
    "list_history",
    "save_history",
    "to_entry",
]
