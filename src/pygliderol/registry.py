"""Reconcile the vendor's device inventory with accessories the hub knows."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from pygliderol.accessory import AccessoryHandle, device_uuid
from pygliderol.exceptions import GliderolError
from pygliderol.models.device import Device

_logger = logging.getLogger(__name__)


class DeviceSource(Protocol):
    async def list_devices(self) -> list[Device]:
        ...


@dataclass
class Reconciliation:
    """Outcome of one discovery cycle.

    ``keep`` holds known accessories the vendor still reports, ``add``
    the reported devices with no accessory yet. ``devices`` maps every
    reported device's accessory identifier to its live snapshot. Known
    accessories the vendor no longer reports appear in neither list;
    nothing is ever pruned.
    """

    keep: list[AccessoryHandle] = field(default_factory=list)
    add: list[Device] = field(default_factory=list)
    devices: dict[str, Device] = field(default_factory=dict)


class DeviceRegistry:
    """Diff the live inventory against a set of known accessories."""

    def __init__(self, source: DeviceSource) -> None:
        self._source = source

    async def fetch_inventory(self) -> list[Device]:
        """Live inventory; vendor failures degrade to an empty list."""
        try:
            return await self._source.list_devices()
        except GliderolError as exc:
            _logger.error("Error getting list of devices: %s", exc)
            return []

    async def reconcile(self, known: Iterable[AccessoryHandle]) -> Reconciliation:
        known_by_uuid: dict[str, AccessoryHandle] = {}
        for handle in known:
            known_by_uuid.setdefault(handle.uuid, handle)

        result = Reconciliation()
        for device in await self.fetch_inventory():
            uuid = device_uuid(device.id)
            if uuid in result.devices:
                _logger.warning("Vendor reported device %s more than once; ignoring duplicate", device.id)
                continue
            result.devices[uuid] = device

            existing = known_by_uuid.get(uuid)
            if existing is not None:
                result.keep.append(existing)
            else:
                result.add.append(device)
        return result
