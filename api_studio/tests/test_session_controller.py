"""
Tests for the session controller state machine.

A single mock transport plays both service endpoints: ``/api/request``
echoes the target URL back as the response body and ``/api/history``
returns whatever the test has recorded.
"""

import asyncio
import json
from datetime import datetime

import httpx
import pytest

from api_studio.client.gateway import ExecutionGateway
from api_studio.client.history import HistoryCache
from api_studio.client.session import SessionController, SessionState
from api_studio.exceptions import SessionBusyError, ValidationError
from api_studio.schemas.history import HistoryEntry
from api_studio.schemas.request import HeaderEntry
from api_studio.schemas.response import ResponseResult


BASE_URL = "http://studio.test"


class FakeService:
    """In-memory stand-in for the execution and history service."""

    def __init__(self):
        self.executed: list[dict] = []
        self.history_calls = 0
        self.history_ok = True
        self.gates: dict[str, asyncio.Event] = {}

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/history":
            self.history_calls += 1
            if not self.history_ok:
                return httpx.Response(200, json={"success": False, "history": []})
            return httpx.Response(200, json={"success": True, "history": [
                self._entry(i, p) for i, p in enumerate(reversed(self.executed), start=1)
            ]})

        payload = json.loads(request.content)
        gate = self.gates.get(payload["url"])
        if gate is not None:
            await gate.wait()
        self.executed.append(payload)
        return httpx.Response(200, json={"response": self._result(payload)})

    @staticmethod
    def _result(payload: dict) -> dict:
        return {"status": 200, "statusText": "OK", "data": payload["url"], "time": 42, "headers": {}}

    def _entry(self, entry_id: int, payload: dict) -> dict:
        return {
            "id": entry_id,
            **payload,
            "response": self._result(payload),
            "createdAt": "2024-05-01T12:00:00",
        }


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def session(service: FakeService) -> SessionController:
    transport = httpx.MockTransport(service)
    return SessionController(
        gateway=ExecutionGateway(base_url=BASE_URL, transport=transport),
        history=HistoryCache(base_url=BASE_URL, transport=transport),
    )


def make_entry() -> HistoryEntry:
    return HistoryEntry(
        id="h-1",
        method="PATCH",
        url="https://example.com/users/1",
        headers={"Authorization": "Bearer abc"},
        body='{"name": "x"}',
        body_type="raw",
        response=ResponseResult(status=404, status_text="Not Found", data="missing", time=7),
        created_at=datetime(2024, 5, 1, 12, 0, 0),
    )


class TestSend:

    @pytest.mark.asyncio
    async def test_send_resolves_and_refreshes_history(self, session, service):
        session.set_url("https://example.com/a")

        result = await session.send()
        await session.wait_for_refresh()

        assert result.status == 200
        assert session.state is SessionState.RESOLVED
        assert session.loading is False
        assert session.response.data == "https://example.com/a"
        assert service.history_calls == 1
        assert [e.url for e in session.history.entries] == ["https://example.com/a"]
        await session.aclose()

    @pytest.mark.asyncio
    async def test_send_transmits_effective_headers(self, session, service):
        session.set_url("https://example.com/a")
        session.update_header(0, "key", "X-Test")
        session.update_header(0, "value", "1")
        session.add_header()
        session.update_header(1, "key", "X-Off")
        session.update_header(1, "value", "2")
        session.update_header(1, "enabled", False)

        await session.send()
        await session.aclose()

        assert service.executed[0]["headers"] == {"X-Test": "1"}

    @pytest.mark.asyncio
    async def test_loading_is_true_while_sending(self, session, service):
        service.executed.append({
            "method": "GET", "url": "https://example.com/old", "headers": {},
            "body": "", "bodyType": "raw",
        })
        await session.start()
        service.gates["https://example.com/slow"] = asyncio.Event()
        session.set_url("https://example.com/slow")

        task = asyncio.create_task(session.send())
        await asyncio.sleep(0)

        assert session.state is SessionState.SENDING
        assert session.loading is True
        assert session.response is None

        # history stays browsable and refreshable mid-flight
        assert [e.url for e in session.history.entries] == ["https://example.com/old"]
        assert await session.history.refresh() is True
        assert session.history.get(1).url == "https://example.com/old"
        assert session.state is SessionState.SENDING

        service.gates["https://example.com/slow"].set()
        await task
        assert session.loading is False
        await session.aclose()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["", "   "])
    async def test_empty_url_never_reaches_gateway(self, session, service, url):
        session.load_into_session(make_entry())
        live = session.response
        session.set_url(url)

        with pytest.raises(ValidationError):
            await session.send()

        assert service.executed == []
        assert session.response is live
        assert session.state is SessionState.RESOLVED
        await session.aclose()

    @pytest.mark.asyncio
    async def test_empty_url_from_idle_stays_idle(self, session, service):
        with pytest.raises(ValidationError):
            await session.send()

        assert session.state is SessionState.IDLE
        assert session.response is None
        await session.aclose()

    @pytest.mark.asyncio
    async def test_network_error_still_refreshes_history(self, service):
        calls = {"history": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/history":
                calls["history"] += 1
                return httpx.Response(200, json={"success": True, "history": []})
            raise httpx.ConnectError("Connection refused")

        transport = httpx.MockTransport(handler)
        session = SessionController(
            gateway=ExecutionGateway(base_url=BASE_URL, transport=transport),
            history=HistoryCache(base_url=BASE_URL, transport=transport),
        )
        session.set_url("https://example.com")

        result = await session.send()
        await session.wait_for_refresh()

        assert result.status == 0
        assert session.response.status_text == "Network Error"
        assert session.state is SessionState.RESOLVED
        assert calls["history"] == 1
        await session.aclose()

    @pytest.mark.asyncio
    async def test_history_failure_does_not_fail_send(self, session, service):
        service.history_ok = False
        session.set_url("https://example.com/a")

        result = await session.send()
        await session.wait_for_refresh()

        assert result.status == 200
        assert session.history.entries == []
        assert session.history.last_error is not None
        await session.aclose()

    @pytest.mark.asyncio
    async def test_unexpected_gateway_error_returns_to_idle(self, session, service):
        class BrokenGateway(ExecutionGateway):
            async def execute(self, payload):
                raise RuntimeError("boom")

        session.gateway = BrokenGateway(base_url=BASE_URL, transport=httpx.MockTransport(service))
        session.set_url("https://example.com/a")

        with pytest.raises(RuntimeError):
            await session.send()

        assert session.state is SessionState.IDLE
        assert session.loading is False
        assert session.response is None
        assert service.history_calls == 0

        session.load_into_session(make_entry())
        assert session.state is SessionState.RESOLVED
        await session.aclose()


class TestSupersession:
    """The last issued send wins, whatever order the replies arrive in."""

    @pytest.mark.asyncio
    async def test_late_first_reply_is_discarded(self, session, service):
        first, second = "https://example.com/first", "https://example.com/second"
        service.gates[first] = asyncio.Event()
        service.gates[second] = asyncio.Event()

        session.set_url(first)
        first_task = asyncio.create_task(session.send())
        await asyncio.sleep(0)

        session.set_url(second)
        second_task = asyncio.create_task(session.send())
        await asyncio.sleep(0)

        service.gates[second].set()
        second_result = await second_task
        assert session.response.data == second

        await session.wait_for_refresh()
        assert [e.url for e in session.history.entries] == [second]

        service.gates[first].set()
        first_result = await first_task
        await session.wait_for_refresh()

        assert second_result.data == second
        assert first_result is None
        assert session.response.data == second
        assert session.state is SessionState.RESOLVED
        assert service.history_calls == 2
        assert [e.url for e in session.history.entries] == [first, second]
        await session.aclose()

    @pytest.mark.asyncio
    async def test_in_order_replies_keep_latest(self, session, service):
        session.set_url("https://example.com/1")
        await session.send()
        session.set_url("https://example.com/2")
        await session.send()
        await session.wait_for_refresh()

        assert session.response.data == "https://example.com/2"
        assert [e.url for e in session.history.entries] == [
            "https://example.com/2",
            "https://example.com/1",
        ]
        await session.aclose()


class TestLoadIntoSession:

    @pytest.mark.asyncio
    async def test_load_replaces_request_and_response(self, session, service):
        entry = make_entry()

        session.load_into_session(entry)

        assert session.state is SessionState.RESOLVED
        assert session.request.method == "PATCH"
        assert session.request.url == "https://example.com/users/1"
        assert session.request.headers.entries == [
            HeaderEntry(key="Authorization", value="Bearer abc"),
            HeaderEntry(),
        ]
        assert session.response.status == 404
        assert session.response.data == "missing"
        assert service.executed == []
        await session.aclose()

    @pytest.mark.asyncio
    async def test_load_then_payload_round_trips(self, session):
        entry = make_entry()
        session.load_into_session(entry)

        payload = session.request.build_payload()

        assert (payload.method, payload.url, payload.body, payload.body_type) == (
            entry.method, entry.url, entry.body, entry.body_type,
        )
        assert payload.headers == entry.headers
        await session.aclose()

    @pytest.mark.asyncio
    async def test_load_while_sending_is_rejected(self, session, service):
        service.gates["https://example.com/slow"] = asyncio.Event()
        session.set_url("https://example.com/slow")
        task = asyncio.create_task(session.send())
        await asyncio.sleep(0)

        with pytest.raises(SessionBusyError):
            session.load_into_session(make_entry())

        assert session.request.url == "https://example.com/slow"
        service.gates["https://example.com/slow"].set()
        await task
        assert session.response.data == "https://example.com/slow"
        await session.aclose()

    @pytest.mark.asyncio
    async def test_reformat_loaded_response(self, session):
        entry = make_entry()
        entry = entry.model_copy(update={
            "response": ResponseResult(status=200, status_text="OK", data='{"a":1}', time=3),
        })
        session.load_into_session(entry)

        session.response.reformat_body()

        assert session.response.data == '{\n  "a": 1\n}'
        assert entry.response.data == '{"a":1}'
        await session.aclose()


class TestHeaderEditing:

    def test_removing_last_row_leaves_one_blank_row(self, session):
        session.update_header(0, "key", "A")
        session.remove_header(0)

        assert session.request.headers.entries == [HeaderEntry()]

    def test_removing_one_of_many_rows(self, session):
        session.add_header()
        session.update_header(1, "key", "B")
        session.remove_header(0)

        assert [e.key for e in session.request.headers] == ["B"]

    def test_stale_update_is_ignored(self, session):
        session.update_header(10, "key", "ghost")

        assert session.request.headers.entries == [HeaderEntry()]

    def test_method_switch_keeps_body(self, session):
        session.set_method("POST")
        session.set_body("a=1", "urlencoded")
        session.set_method("GET")
        session.set_method("PUT")

        assert session.request.body == "a=1"
        assert session.request.body_type == "urlencoded"


@pytest.mark.asyncio
async def test_start_loads_initial_history(session, service):
    service.executed.append({
        "method": "GET", "url": "https://example.com/old", "headers": {},
        "body": "", "bodyType": "raw",
    })

    await session.start()

    assert [e.url for e in session.history.entries] == ["https://example.com/old"]
    await session.aclose()
