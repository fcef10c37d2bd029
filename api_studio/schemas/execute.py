"""
Pydantic schemas for the execution endpoint reply.
"""

from .request import WireModel
from .response import ResponseResult


class ExecuteReply(WireModel):
    """Body returned by ``POST /api/request``."""
    response: ResponseResult
