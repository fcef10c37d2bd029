"""
Pydantic schemas for execution results.
"""

from .request import WireModel


NETWORK_ERROR_STATUS = 0
NETWORK_ERROR_TEXT = "Network Error"


class ResponseResult(WireModel):
    """
    Normalized result of one execution.

    ``status == 0`` with ``status_text == "Network Error"`` marks a transport
    failure; ``data`` then holds the error description instead of a body.
    ``time`` is the elapsed time in milliseconds.
    """
    status: int
    status_text: str = ""
    data: str = ""
    time: int = 0
    headers: dict[str, str] = {}

    @classmethod
    def network_error(cls, message: str) -> "ResponseResult":
        """Build the sentinel result for a failed transport attempt."""
        return cls(
            status=NETWORK_ERROR_STATUS,
            status_text=NETWORK_ERROR_TEXT,
            data=message,
            time=0,
            headers={},
        )

    @property
    def is_network_error(self) -> bool:
        return self.status == NETWORK_ERROR_STATUS and self.status_text == NETWORK_ERROR_TEXT
