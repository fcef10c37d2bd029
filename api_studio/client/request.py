"""
The request being composed in a session.
"""

from ..exceptions import ValidationError
from ..schemas.request import BODY_METHODS, BodyType, HeaderEntry, HttpMethod, RequestPayload
from .headers import HeaderList


class RequestSpec:
    """
    Method, URL, header rows and body of the request being edited.

    ``body`` and ``body_type`` are kept for every method so that switching
    from POST to GET and back loses nothing; whether they are transmitted is
    decided by the method (see ``transmits_body``).
    """

    def __init__(
        self,
        method: HttpMethod = "GET",
        url: str = "",
        headers: HeaderList | None = None,
        body: str = "",
        body_type: BodyType = "raw",
    ):
        self.method = method
        self.url = url
        self.headers = headers if headers is not None else HeaderList([HeaderEntry()])
        self.body = body
        self.body_type = body_type

    def __repr__(self) -> str:
        return f"RequestSpec(method={self.method!r}, url={self.url!r})"

    @property
    def transmits_body(self) -> bool:
        return self.method in BODY_METHODS

    def validate(self) -> None:
        """
        Check that the request may be sent.

        Raises:
            ValidationError: If the URL is empty or only whitespace
        """
        if not self.url.strip():
            raise ValidationError("Please enter a URL")

    def build_payload(self) -> RequestPayload:
        """Return the execution payload for the current state."""
        return RequestPayload(
            method=self.method,
            url=self.url,
            headers=self.headers.effective_map(),
            body=self.body,
            body_type=self.body_type,
        )
