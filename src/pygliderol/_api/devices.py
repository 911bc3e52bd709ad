"""Device list endpoint: ``GET /prod/API/{mobile}/all``."""

from __future__ import annotations

from pygliderol._api._common import auth_headers, build_url, parse_envelope
from pygliderol._transport import Transport
from pygliderol.config import GliderolConfig
from pygliderol.models.device import Device
from pygliderol.models.responses import DeviceListResponse

ENDPOINT = "all"


def build_list_request(config: GliderolConfig) -> tuple[str, dict[str, str]]:
    """Return ``(url, headers)`` for the device list request."""
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        **auth_headers(config),
    }
    return build_url(config, ENDPOINT), headers


async def fetch_device_list(config: GliderolConfig, transport: Transport) -> list[Device]:
    """Fetch every device registered to the configured mobile number.

    Raises
    ------
    GliderolApiError
        If the response is not ``200`` with ``ok: true``.
    GliderolTransportError
        If the service could not be reached.
    """
    url, headers = build_list_request(config)
    response = await transport.request("GET", url, headers=headers)
    envelope = parse_envelope(response, DeviceListResponse, url=url)
    return list(envelope.device_list)
