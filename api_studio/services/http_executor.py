"""
HTTP execution service for sending HTTP requests.

This service performs the outbound call for ``POST /api/request`` using
httpx, captures the response and timing, and turns transport failures into
the network error sentinel result.
"""

import logging
import time

import httpx

from ..config import get_settings
from ..schemas.request import BODY_METHODS, RequestPayload
from ..schemas.response import ResponseResult


logger = logging.getLogger(__name__)


def parse_form_pairs(body: str, separators: str = "&") -> list[tuple[str, str]]:
    """
    Parse ``key=value`` pairs from a form body.

    Pairs are split on any character in ``separators``; pieces without ``=``
    and pieces with an empty key are skipped.

    Args:
        body: Form body, e.g. ``a=1&b=2``
        separators: Characters separating pairs

    Returns:
        List of (key, value) tuples in body order
    """
    for sep in separators[1:]:
        body = body.replace(sep, separators[0])

    pairs: list[tuple[str, str]] = []
    for piece in body.split(separators[0]):
        piece = piece.strip()
        if "=" not in piece:
            continue
        key, value = piece.split("=", 1)
        if key:
            pairs.append((key, value))
    return pairs


def build_request_kwargs(payload: RequestPayload) -> dict:
    """
    Translate a payload into ``httpx.AsyncClient.request`` keyword arguments.

    The body is only attached for methods that carry one (POST, PUT, PATCH).
    """
    kwargs: dict = {
        "method": payload.method,
        "url": payload.url,
        "headers": dict(payload.headers),
    }
    if payload.method not in BODY_METHODS or not payload.body:
        return kwargs

    if payload.body_type == "urlencoded":
        kwargs["data"] = dict(parse_form_pairs(payload.body))
    elif payload.body_type == "form-data":
        # (None, value) makes httpx emit a plain multipart field
        kwargs["files"] = [
            (key, (None, value)) for key, value in parse_form_pairs(payload.body, "&\n")
        ]
    else:  # raw
        kwargs["content"] = payload.body
    return kwargs


async def execute_request(
    payload: RequestPayload,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ResponseResult:
    """
    Execute an HTTP request and return the normalized result.

    Args:
        payload: The request to execute
        timeout: Request timeout in seconds; defaults to the configured value
        transport: Optional httpx transport, used to route calls in tests

    Returns:
        ResponseResult on any outcome; status 0 for transport failures
    """
    timeout = timeout or get_settings().request_timeout

    try:
        start_time = time.perf_counter()

        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.request(**build_request_kwargs(payload))

        end_time = time.perf_counter()
        response_time_ms = int((end_time - start_time) * 1000)

    except httpx.TimeoutException:
        logger.warning("%s %s timed out after %ss", payload.method, payload.url, timeout)
        return ResponseResult.network_error(f"Request exceeded {timeout} seconds timeout")
    except httpx.InvalidURL as e:
        logger.warning("%s %s: invalid URL", payload.method, payload.url)
        return ResponseResult.network_error(f"Invalid URL: {e}")
    except httpx.HTTPError as e:
        logger.warning("%s %s failed: %s", payload.method, payload.url, e)
        return ResponseResult.network_error(str(e) or type(e).__name__)

    logger.info(
        "%s %s -> %s in %dms",
        payload.method, payload.url, response.status_code, response_time_ms,
    )
    return ResponseResult(
        status=response.status_code,
        status_text=response.reason_phrase or "",
        data=response.text,
        time=response_time_ms,
        headers=dict(response.headers),
    )
