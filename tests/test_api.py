from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import pytest

from pygliderol._api.control import build_control_request, send_door_command
from pygliderol._api.devices import build_list_request, fetch_device_list
from pygliderol._transport import TransportResponse
from pygliderol.config import GliderolConfig
from pygliderol.exceptions import GliderolApiError, GliderolCommandError
from pygliderol.models.door import VendorDoorState

USER_AGENT = "gliderol/1 CFNetwork/1496.0.7 Darwin/23.5.0"


def _config() -> GliderolConfig:
    return GliderolConfig(base_url="https://api.example.com/", mobile_number="+61400111222", api_key="KEY-1")


class _FakeTransport:
    def __init__(self, status: int, body: Any) -> None:
        self._status = status
        self._body = body
        self.calls: list[tuple[str, str, dict[str, str], Mapping[str, Any] | None]] = []

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        payload: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        self.calls.append((method, url, dict(headers), payload))
        text = json.dumps(self._body) if self._body is not None else ""
        return TransportResponse(status=self._status, body=self._body, text=text)


def test_list_request_matches_vendor_contract() -> None:
    url, headers = build_list_request(_config())

    assert url == "https://api.example.com/prod/API/61400111222/all?appName=gliderol"
    assert headers == {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": "KEY-1",
        "User-Agent": USER_AGENT,
    }


def test_control_request_matches_vendor_contract() -> None:
    url, headers, payload = build_control_request(_config(), "dev-9", VendorDoorState.OPEN)

    assert url == "https://api.example.com/prod/API/61400111222/dev-9/CONTROL/?appName=gliderol"
    assert headers == {
        "Authorization": "KEY-1",
        "User-Agent": USER_AGENT,
        "Content-Type": "application/json",
    }
    assert payload == {"state": 1}


@pytest.mark.asyncio
async def test_fetch_device_list_returns_devices() -> None:
    transport = _FakeTransport(
        200,
        {
            "ok": True,
            "deviceList": [
                {"id": "dev-1", "name": "Front", "online": True, "outletType": "GTS"},
                {"id": "dev-2", "name": "Back", "online": False, "outletType": "GTS"},
            ],
        },
    )

    devices = await fetch_device_list(_config(), transport)

    assert [d.id for d in devices] == ["dev-1", "dev-2"]
    assert transport.calls[0][0] == "GET"
    assert transport.calls[0][3] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "body"),
    [
        (200, {"ok": False, "deviceList": []}),
        (500, {"ok": True, "deviceList": []}),
        (401, None),
        (200, ["not", "an", "object"]),
        (200, None),
    ],
)
async def test_fetch_device_list_rejects_unexpected_responses(status: int, body: Any) -> None:
    with pytest.raises(GliderolApiError) as exc_info:
        await fetch_device_list(_config(), _FakeTransport(status, body))

    exc = exc_info.value
    assert not isinstance(exc, GliderolCommandError)
    assert exc.status_code == status
    assert exc.body == body
    # the mobile number never leaks into error messages
    assert "61400111222" not in str(exc)


@pytest.mark.asyncio
async def test_send_door_command_posts_state() -> None:
    transport = _FakeTransport(200, {"ok": True})

    ack = await send_door_command(_config(), transport, "dev-1", VendorDoorState.CLOSED)

    assert ack.ok is True
    method, url, _headers, payload = transport.calls[0]
    assert method == "POST"
    assert url.endswith("/dev-1/CONTROL/?appName=gliderol")
    assert payload == {"state": 0}


@pytest.mark.asyncio
@pytest.mark.parametrize(("status", "body"), [(200, {"ok": False}), (503, {"ok": True}), (200, {})])
async def test_send_door_command_failure_raises_command_error(status: int, body: Any) -> None:
    with pytest.raises(GliderolCommandError) as exc_info:
        await send_door_command(_config(), _FakeTransport(status, body), "dev-1", VendorDoorState.OPEN)

    assert exc_info.value.status_code == status
