"""Door control endpoint: ``POST /prod/API/{mobile}/{device}/CONTROL/``."""

from __future__ import annotations

from typing import Any

from pygliderol._api._common import auth_headers, build_url, parse_envelope
from pygliderol._transport import Transport
from pygliderol.config import GliderolConfig
from pygliderol.exceptions import GliderolCommandError
from pygliderol.models.door import VendorDoorState
from pygliderol.models.responses import ControlResponse


def build_control_request(
    config: GliderolConfig,
    device_id: str,
    state: VendorDoorState,
) -> tuple[str, dict[str, str], dict[str, Any]]:
    """Return ``(url, headers, payload)`` for a door command.

    *state* is in vendor encoding (``1`` opens, ``0`` closes).
    """
    headers = {
        **auth_headers(config),
        "Content-Type": "application/json",
    }
    payload = {"state": int(state)}
    return build_url(config, f"{device_id}/CONTROL/"), headers, payload


async def send_door_command(
    config: GliderolConfig,
    transport: Transport,
    device_id: str,
    state: VendorDoorState,
) -> ControlResponse:
    """Send a door command.

    Raises
    ------
    GliderolCommandError
        If the vendor did not acknowledge the command.
    GliderolTransportError
        If the service could not be reached.
    """
    url, headers, payload = build_control_request(config, device_id, state)
    response = await transport.request("POST", url, headers=headers, payload=payload)
    return parse_envelope(response, ControlResponse, url=url, error_cls=GliderolCommandError)
