"""
Session controller.

Owns the single live request, the single live response and the history
snapshot of one session, and drives the Idle -> Sending -> Resolved cycle.

Sends are ordered by issue, not by completion: when a second send starts
before the first returns, the first send's result is discarded on arrival.
"""

import asyncio
import logging
from enum import Enum

from ..exceptions import SessionBusyError
from ..schemas.history import HistoryEntry
from ..schemas.request import BodyType, HttpMethod
from ..schemas.response import ResponseResult
from .gateway import ExecutionGateway
from .history import HistoryCache, request_from_history
from .request import RequestSpec
from .response import ResponseModel


logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    RESOLVED = "resolved"


class SessionController:
    """
    Orchestrates one request/response session.

    Args:
        gateway: Execution service client
        history: History cache refreshed after every completed send
        request: Initial request; a blank GET with one empty header row by default
    """

    def __init__(
        self,
        gateway: ExecutionGateway,
        history: HistoryCache,
        request: RequestSpec | None = None,
    ):
        self.gateway = gateway
        self.history = history
        self.request = request or RequestSpec()
        self.response: ResponseModel | None = None
        self.state = SessionState.IDLE
        self._send_seq = 0
        self._refresh_tasks: set[asyncio.Task] = set()

    @property
    def loading(self) -> bool:
        return self.state is SessionState.SENDING

    async def start(self) -> None:
        """Load the initial history snapshot."""
        await self.history.refresh()

    async def aclose(self) -> None:
        """Wait for pending refreshes and close the HTTP clients."""
        await self.wait_for_refresh()
        await self.gateway.aclose()
        await self.history.aclose()

    # Request editing

    def set_method(self, method: HttpMethod) -> None:
        # body and body_type survive a switch to a method that does not send them
        self.request.method = method

    def set_url(self, url: str) -> None:
        self.request.url = url

    def set_body(self, body: str, body_type: BodyType | None = None) -> None:
        self.request.body = body
        if body_type is not None:
            self.request.body_type = body_type

    def add_header(self) -> None:
        self.request.headers.add()

    def update_header(self, index: int, field: str, value: str | bool) -> None:
        self.request.headers.update(index, field, value)

    def remove_header(self, index: int) -> None:
        """Remove a header row, keeping one blank row when the list empties."""
        self.request.headers.remove(index)
        if not self.request.headers:
            self.request.headers.add()

    # Execution

    async def send(self) -> ResponseResult | None:
        """
        Execute the current request.

        Raises:
            ValidationError: If the URL is empty; no state changes in that case
            Exception: Anything the gateway raises unexpectedly; the session
                returns to Idle first

        Returns:
            The result that became live, or None if a newer send superseded
            this one before it completed
        """
        self.request.validate()
        payload = self.request.build_payload()

        self._send_seq += 1
        seq = self._send_seq
        self.response = None
        self.state = SessionState.SENDING

        try:
            result = await self.gateway.execute(payload)
        except BaseException:
            if seq == self._send_seq:
                self.state = SessionState.IDLE
            raise

        if seq != self._send_seq:
            # the execution was still recorded server-side
            logger.debug("Discarding stale result of send #%d (latest is #%d)", seq, self._send_seq)
            self._spawn_refresh()
            return None

        self.response = ResponseModel(result)
        self.state = SessionState.RESOLVED
        self._spawn_refresh()
        return result

    def _spawn_refresh(self) -> None:
        task = asyncio.create_task(self.history.refresh())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    async def wait_for_refresh(self) -> None:
        """Wait until every spawned history refresh has finished."""
        while pending := [t for t in self._refresh_tasks if not t.done()]:
            await asyncio.gather(*pending)

    # History

    def load_into_session(self, entry: HistoryEntry) -> None:
        """
        Make a history entry the live request and response without executing it.

        Raises:
            SessionBusyError: If a send is in flight
        """
        if self.state is SessionState.SENDING:
            raise SessionBusyError("Cannot load a history entry while a request is being sent")

        self.request = request_from_history(entry)
        self.response = ResponseModel(entry.response)
        self.state = SessionState.RESOLVED
