"""
Local snapshot of the execution history.

The history service is the source of truth; this cache is replaced wholesale
on every successful refresh and left as-is when a refresh fails.
"""

import logging

import httpx

from ..config import get_settings
from ..exceptions import HistoryFetchError
from ..schemas.history import HistoryEntry, HistoryListResponse
from .headers import HeaderList
from .request import RequestSpec


logger = logging.getLogger(__name__)

HISTORY_PATH = "/api/history"


def request_from_history(entry: HistoryEntry) -> RequestSpec:
    """
    Rebuild an editable request from a history entry.

    Each stored header becomes an enabled row, in mapping order, followed by
    one blank row. An entry without headers yields just the blank row.
    """
    headers = HeaderList.from_mapping(entry.headers)
    headers.add()
    return RequestSpec(
        method=entry.method,
        url=entry.url,
        headers=headers,
        body=entry.body,
        body_type=entry.body_type,
    )


class HistoryCache:
    """Ordered snapshot of ``HistoryEntry`` values fetched from the service."""

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
        self._entries: list[HistoryEntry] = []
        self.last_error: HistoryFetchError | None = None

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self) -> list[HistoryEntry]:
        """
        Fetch the full history from the service.

        Raises:
            HistoryFetchError: If the service is unreachable, replies with
                something unparseable, or reports ``success: false``
        """
        try:
            reply = await self._client.get(f"{self.base_url}{HISTORY_PATH}")
            listing = HistoryListResponse.model_validate(reply.json())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise HistoryFetchError(f"History service unreachable: {e}") from e
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError
            raise HistoryFetchError(f"Malformed history reply: {e}") from e

        if not listing.success:
            raise HistoryFetchError("History service reported failure")
        return listing.history

    async def refresh(self) -> bool:
        """
        Replace the snapshot with the service's current history.

        Never raises; failures are logged and keep the previous snapshot.

        Returns:
            True if the snapshot was replaced
        """
        try:
            entries = await self.fetch()
        except HistoryFetchError as e:
            self.last_error = e
            logger.warning("Error fetching history: %s", e.detail)
            return False

        self._entries = entries
        self.last_error = None
        logger.debug("History refreshed: %d entries", len(entries))
        return True

    def get(self, entry_id: int | str) -> HistoryEntry | None:
        """Look up a cached entry by id."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None
