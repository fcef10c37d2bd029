"""
Pydantic schemas for outgoing request data.

Wire field names are camelCase (``bodyType``); Python attributes stay
snake_case and either spelling is accepted on input.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# HTTP methods supported by the system
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Methods whose body and body type are transmitted
BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})

# Body encodings supported for requests
BodyType = Literal["raw", "form-data", "urlencoded"]


class WireModel(BaseModel):
    """Base for models exchanged with the execution and history service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump using the camelCase field names of the wire format."""
        return self.model_dump(mode="json", by_alias=True)


class HeaderEntry(BaseModel):
    """One editable header row."""

    model_config = ConfigDict(validate_assignment=True)

    key: str = ""
    value: str = ""
    enabled: bool = True


class RequestPayload(WireModel):
    """The canonical execution payload sent to ``POST /api/request``."""
    method: HttpMethod
    url: str
    headers: dict[str, str] = {}
    body: str = ""
    body_type: BodyType = "raw"
