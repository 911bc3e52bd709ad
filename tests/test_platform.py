from __future__ import annotations

from collections.abc import Sequence

import pytest

from pygliderol.accessory import Accessory, AccessoryHandle, device_uuid
from pygliderol.config import GliderolConfig
from pygliderol.exceptions import GliderolApiError
from pygliderol.models.device import Device
from pygliderol.models.door import DoorState, TargetDoorState, VendorDoorState
from pygliderol.platform import GliderolPlatform
from pygliderol.state.store import MemoryStateStore


class _FakeVendor:
    def __init__(self, devices: list[Device], *, list_error: Exception | None = None) -> None:
        self.devices = devices
        self.list_error = list_error
        self.commands: list[tuple[str, int]] = []

    async def list_devices(self) -> list[Device]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.devices)

    async def set_door_state(self, device_id: str, state: VendorDoorState | int) -> None:
        self.commands.append((device_id, int(state)))


def _config() -> GliderolConfig:
    return GliderolConfig(base_url="https://api.example.com", mobile_number="+1", api_key="k", settle_duration=0.0)


@pytest.mark.asyncio
async def test_discovery_restores_cached_and_registers_new() -> None:
    front = Device(id="front", name="Front", outlet_type="GTS")
    back = Device(id="back", name="Back", outlet_type="GTS")
    vendor = _FakeVendor([front, back])
    registered: list[Sequence[AccessoryHandle]] = []
    platform = GliderolPlatform(_config(), vendor, MemoryStateStore(), register_accessories=registered.append)
    cached = Accessory(display_name="Front", uuid=device_uuid("front"))
    platform.configure_accessory(cached)

    controllers = await platform.discover_devices()

    assert [c.device.id for c in controllers] == ["front", "back"]
    assert controllers[0].accessory is cached
    assert cached.context["device"]["id"] == "front"
    assert len(registered) == 1
    (new_accessory,) = registered[0]
    assert new_accessory.uuid == device_uuid("back")
    assert new_accessory.context["device"] == {"id": "back", "name": "Back", "online": None, "outletType": "GTS"}
    assert set(platform.controllers) == {device_uuid("front"), device_uuid("back")}
    assert len(platform.accessories) == 2


@pytest.mark.asyncio
async def test_rediscovery_keeps_previously_added_accessories() -> None:
    vendor = _FakeVendor([Device(id="front", name="Front")])
    registered: list[Sequence[AccessoryHandle]] = []
    platform = GliderolPlatform(_config(), vendor, MemoryStateStore(), register_accessories=registered.append)

    await platform.discover_devices()
    await platform.discover_devices()

    assert len(registered) == 1
    assert len(platform.accessories) == 1


@pytest.mark.asyncio
async def test_discovery_failure_yields_no_controllers() -> None:
    vendor = _FakeVendor([], list_error=GliderolApiError("HTTP 503", status_code=503))
    platform = GliderolPlatform(_config(), vendor, MemoryStateStore())
    platform.configure_accessory(Accessory(display_name="Front", uuid=device_uuid("front")))

    assert await platform.discover_devices() == []
    assert len(platform.accessories) == 1


@pytest.mark.asyncio
async def test_controllers_share_store_and_report_through_listener() -> None:
    vendor = _FakeVendor([Device(id="front", name="Front")])
    store = MemoryStateStore()
    seen: list[tuple[str, DoorState]] = []

    def _listener(accessory: AccessoryHandle):  # type: ignore[no-untyped-def]
        return lambda state: seen.append((accessory.uuid, state))

    platform = GliderolPlatform(_config(), vendor, store, state_listener=_listener)
    (controller,) = await platform.discover_devices()

    await controller.set_target_state(TargetDoorState.OPEN)

    uuid = device_uuid("front")
    assert vendor.commands == [("front", 1)]
    assert seen == [(uuid, DoorState.OPENING), (uuid, DoorState.OPEN)]
    assert store.snapshot() == {uuid: DoorState.OPEN}
