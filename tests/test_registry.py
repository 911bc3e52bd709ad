from __future__ import annotations

import pytest

from pygliderol.accessory import Accessory, device_uuid
from pygliderol.exceptions import GliderolApiError, GliderolTransportError
from pygliderol.models.device import Device
from pygliderol.registry import DeviceRegistry


class _Inventory:
    def __init__(self, devices: list[Device] | None = None, error: Exception | None = None) -> None:
        self._devices = devices or []
        self._error = error
        self.calls = 0

    async def list_devices(self) -> list[Device]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._devices)


def _device(device_id: str) -> Device:
    return Device(id=device_id, name=device_id.upper(), outlet_type="GTS")


def test_device_uuid_matches_hub_template() -> None:
    uuid = device_uuid("dev-1")
    assert uuid == "d58b5e16-5f7d-43f4-87c4-e7ec8f7e8315"
    assert uuid[14] == "4"
    assert uuid[19] in "89ab"
    assert [len(part) for part in uuid.split("-")] == [8, 4, 4, 4, 12]
    assert device_uuid("dev-1") == device_uuid("dev-1")
    assert device_uuid("dev-1") != device_uuid("dev-2")


@pytest.mark.asyncio
async def test_known_device_is_kept_and_new_device_added() -> None:
    a, b = _device("a"), _device("b")
    known_a = Accessory.for_device(a)
    registry = DeviceRegistry(_Inventory([a, b]))

    result = await registry.reconcile({known_a})

    assert result.keep == [known_a]
    assert result.keep[0] is known_a
    assert result.add == [b]
    assert set(result.devices) == {device_uuid("a"), device_uuid("b")}


@pytest.mark.asyncio
async def test_empty_inventory_keeps_and_adds_nothing() -> None:
    known = {Accessory.for_device(_device("a"))}
    registry = DeviceRegistry(_Inventory([]))

    result = await registry.reconcile(known)

    assert result.keep == []
    assert result.add == []
    assert result.devices == {}


@pytest.mark.asyncio
async def test_stale_accessories_are_not_pruned() -> None:
    stale = Accessory.for_device(_device("gone"))
    registry = DeviceRegistry(_Inventory([_device("a")]))

    result = await registry.reconcile([stale])

    assert result.keep == []
    assert [d.id for d in result.add] == ["a"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [GliderolApiError("HTTP 500", status_code=500), GliderolTransportError("connection reset")],
)
async def test_vendor_failure_degrades_to_empty_cycle(error: Exception) -> None:
    inventory = _Inventory(error=error)
    registry = DeviceRegistry(inventory)

    result = await registry.reconcile([Accessory.for_device(_device("a"))])

    assert inventory.calls == 1
    assert result.keep == []
    assert result.add == []


@pytest.mark.asyncio
async def test_duplicate_vendor_entries_are_reported_once() -> None:
    registry = DeviceRegistry(_Inventory([_device("a"), _device("a")]))

    result = await registry.reconcile([])

    assert [d.id for d in result.add] == ["a"]
