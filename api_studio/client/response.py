"""
The live response of a session and helpers to present it.
"""

import json
import logging
from collections.abc import Callable
from enum import Enum

from ..exceptions import FormatError
from ..schemas.response import ResponseResult


logger = logging.getLogger(__name__)

BodyFormatter = Callable[[str], str]


class StatusClass(str, Enum):
    """Display class of an HTTP status code."""
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_OR_SERVER_ERROR = "clientOrServerError"
    UNKNOWN = "unknown"


def classify_status(status: int) -> StatusClass:
    """
    Classify a status code.

    1xx codes and the network error sentinel ``0`` are ``UNKNOWN``.
    """
    if 200 <= status < 300:
        return StatusClass.SUCCESS
    if 300 <= status < 400:
        return StatusClass.REDIRECT
    if status >= 400:
        return StatusClass.CLIENT_OR_SERVER_ERROR
    return StatusClass.UNKNOWN


def format_time(ms: int) -> str:
    """Render an elapsed time: ``"250ms"`` below one second, ``"1.50s"`` above."""
    if ms < 1000:
        return f"{ms}ms"
    return f"{ms / 1000:.2f}s"


def pretty_json(text: str) -> str:
    """
    Re-indent a JSON document with two spaces.

    Raises:
        FormatError: If ``text`` is not valid JSON
    """
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise FormatError(f"Body is not valid JSON: {e}") from e
    return json.dumps(parsed, indent=2, ensure_ascii=False)


class ResponseModel:
    """Wraps the live ``ResponseResult`` and allows in-place body formatting."""

    def __init__(self, result: ResponseResult):
        self.result = result.model_copy()

    def __repr__(self) -> str:
        return f"ResponseModel(status={self.status!r})"

    @property
    def status(self) -> int:
        return self.result.status

    @property
    def status_text(self) -> str:
        return self.result.status_text

    @property
    def data(self) -> str:
        return self.result.data

    @property
    def time(self) -> int:
        return self.result.time

    @property
    def headers(self) -> dict[str, str]:
        return dict(self.result.headers)

    @property
    def status_class(self) -> StatusClass:
        return classify_status(self.result.status)

    @property
    def formatted_time(self) -> str:
        return format_time(self.result.time)

    def reformat_body(self, formatter: BodyFormatter = pretty_json) -> bool:
        """
        Replace ``data`` with ``formatter(data)``.

        If the formatter raises ``FormatError`` or ``ValueError`` (which
        covers ``json.JSONDecodeError``) the body is left untouched.

        Returns:
            True if the body was replaced
        """
        try:
            formatted = formatter(self.result.data)
        except (FormatError, ValueError) as e:
            logger.debug("Body left unformatted: %s", e)
            return False
        self.result = self.result.model_copy(update={"data": formatted})
        return True

    def copy_text(self) -> str | None:
        """Text to place on the clipboard, or None when there is no body."""
        return self.result.data or None
