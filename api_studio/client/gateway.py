"""
Client side of the execution service.

All outbound calls go through ``POST {base}/api/request``; the service
performs the actual HTTP exchange. Any failure to get a well-formed reply
from the service is converted into the network error sentinel, so callers
always receive a ``ResponseResult``.
"""

import logging
import time

import httpx

from ..config import get_settings
from ..schemas.execute import ExecuteReply
from ..schemas.request import RequestPayload
from ..schemas.response import ResponseResult


logger = logging.getLogger(__name__)

EXECUTE_PATH = "/api/request"


class ExecutionGateway:
    """
    Sends request payloads to the execution service.

    One attempt per call; no retries.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.request_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(self, payload: RequestPayload) -> ResponseResult:
        """
        Execute ``payload`` through the service.

        Args:
            payload: The request to execute

        Returns:
            The service's result, or the network error sentinel
        """
        start_time = time.perf_counter()
        try:
            reply = await self._client.post(
                f"{self.base_url}{EXECUTE_PATH}",
                json=payload.to_wire(),
            )
            body = reply.json()
            if not isinstance(body, dict) or "response" not in body:
                raise ValueError(
                    f"Malformed reply from execution service (HTTP {reply.status_code})"
                )
            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            if isinstance(body["response"], dict):
                body["response"].setdefault("time", elapsed_ms)
            result = ExecuteReply.model_validate(body).response
        except httpx.TimeoutException:
            return self._network_error("Request timed out")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._network_error(str(e) or type(e).__name__)
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError both land here
            return self._network_error(str(e))

        logger.debug(
            "%s %s -> %s in %sms (round trip %sms)",
            payload.method, payload.url, result.status, result.time, elapsed_ms,
        )
        return result

    @staticmethod
    def _network_error(message: str) -> ResponseResult:
        logger.warning("Execution failed: %s", message)
        return ResponseResult.network_error(message)
