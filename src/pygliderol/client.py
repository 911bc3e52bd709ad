"""High-level async client for the Gliderol garage door API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pygliderol._api.control import send_door_command
from pygliderol._api.devices import fetch_device_list
from pygliderol._transport import HttpTransport, Transport
from pygliderol.config import GliderolConfig
from pygliderol.exceptions import GliderolError
from pygliderol.models.device import Device
from pygliderol.models.door import VendorDoorState

_logger = logging.getLogger(__name__)


class GliderolClient:
    """Async client for the Gliderol API.

    The client is stateless apart from its HTTP session; every call maps
    onto exactly one request and nothing is retried.

    Usage::

        async with GliderolClient(config) as client:
            devices = await client.list_devices()
            await client.set_door_state(devices[0].id, VendorDoorState.OPEN)
    """

    def __init__(
        self,
        config: GliderolConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> GliderolConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> GliderolClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise GliderolError("Client not initialized. Use 'async with GliderolClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def list_devices(self) -> list[Device]:
        """Fetch all garage doors associated with the account."""
        devices = await fetch_device_list(self._config, self._require_transport())
        _logger.debug("Vendor reported %d device(s)", len(devices))
        return devices

    async def set_door_state(self, device_id: str, state: VendorDoorState | int) -> None:
        """Command a door using the vendor encoding (``1`` open, ``0`` closed).

        Raises :class:`GliderolCommandError` when the vendor rejects the
        command and :class:`GliderolTransportError` when it cannot be reached.
        """
        vendor_state = VendorDoorState(state)
        _logger.debug("Sending state=%d to device %s", vendor_state, device_id)
        await send_door_command(self._config, self._require_transport(), device_id, vendor_state)
