"""Discovery driver tying the registry, store and controllers together.

The host hands over accessories restored from its cache through
:meth:`GliderolPlatform.configure_accessory`, then calls
:meth:`GliderolPlatform.discover_devices` once it has finished starting.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from pygliderol.accessory import CONTEXT_DEVICE_KEY, Accessory, AccessoryHandle
from pygliderol.config import GliderolConfig
from pygliderol.controller import DoorController
from pygliderol.models.device import Device
from pygliderol.models.door import DoorState, VendorDoorState
from pygliderol.registry import DeviceRegistry
from pygliderol.state.store import StateStore

_logger = logging.getLogger(__name__)

RegisterCallback = Callable[[Sequence[AccessoryHandle]], None]
StateListenerFactory = Callable[[AccessoryHandle], Callable[[DoorState], None] | None]


class PlatformClient(Protocol):
    """Inventory source and door commander in one (normally :class:`GliderolClient`)."""

    async def list_devices(self) -> list[Device]:
        ...

    async def set_door_state(self, device_id: str, state: VendorDoorState | int) -> None:
        ...


class GliderolPlatform:
    """Owns the known accessories and one controller per discovered door.

    Parameters
    ----------
    config : GliderolConfig
        Supplies ``settle_duration`` for every controller.
    client
        Used both as the inventory source and to send door commands.
    store : StateStore
        Shared by all controllers.
    register_accessories : callable, optional
        Called once per discovery with accessories created for new devices.
    state_listener : callable, optional
        Given an accessory, returns the callback its controller should
        send current-state projections to.
    """

    def __init__(
        self,
        config: GliderolConfig,
        client: PlatformClient,
        store: StateStore,
        *,
        register_accessories: RegisterCallback | None = None,
        state_listener: StateListenerFactory | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._store = store
        self._registry = DeviceRegistry(client)
        self._register_accessories = register_accessories
        self._state_listener = state_listener
        self.accessories: list[AccessoryHandle] = []
        self.controllers: dict[str, DoorController] = {}

    def configure_accessory(self, accessory: AccessoryHandle) -> None:
        """Track an accessory the host restored from its cache."""
        _logger.info("Loading accessory from cache: %s", accessory.display_name)
        self.accessories.append(accessory)

    def _attach(self, accessory: AccessoryHandle, device: Device) -> DoorController:
        listener = self._state_listener(accessory) if self._state_listener is not None else None
        controller = DoorController(
            accessory,
            device,
            self._client,
            self._store,
            settle_duration=self._config.settle_duration,
            on_current_state=listener,
        )
        self.controllers[accessory.uuid] = controller
        return controller

    async def discover_devices(self) -> list[DoorController]:
        """Run one discovery cycle and return a controller per reported door.

        Vendor failures yield an empty list. Accessories whose device is no
        longer reported are left registered.
        """
        result = await self._registry.reconcile(self.accessories)

        controllers: list[DoorController] = []
        for accessory in result.keep:
            _logger.info("Restoring existing accessory from cache: %s", accessory.display_name)
            device = result.devices[accessory.uuid]
            if CONTEXT_DEVICE_KEY not in accessory.context:
                accessory.context[CONTEXT_DEVICE_KEY] = device.to_context()
            controllers.append(self._attach(accessory, device))

        created: list[AccessoryHandle] = []
        for device in result.add:
            _logger.info("Adding new accessory: %s", device.display_name)
            accessory = Accessory.for_device(device)
            controllers.append(self._attach(accessory, device))
            created.append(accessory)

        if created:
            self.accessories.extend(created)
            if self._register_accessories is not None:
                self._register_accessories(created)

        for controller in controllers:
            await controller.initialize()
        return controllers
