"""Per-door state machine bridging hub requests to vendor commands.

A transition is open-loop: after the vendor acknowledges a command the
controller waits ``settle_duration`` seconds for the door to travel and
then records the requested state. Nothing is polled from the vendor.

::

    Idle(OPEN) --close--> CLOSING --ok, after settle--> Idle(CLOSED)
                          CLOSING --failure---------->  Idle(OPEN)
    Idle(CLOSED) --open--> OPENING --ok, after settle--> Idle(OPEN)
                           OPENING --failure---------->  Idle(CLOSED)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from pygliderol._constants import DEFAULT_SETTLE_DURATION, MANUFACTURER
from pygliderol.accessory import AccessoryHandle
from pygliderol.exceptions import GliderolError
from pygliderol.models.device import Device
from pygliderol.models.door import DoorState, TargetDoorState, VendorDoorState, to_vendor_state
from pygliderol.state.store import StateStore

_logger = logging.getLogger(__name__)

StateCallback = Callable[[DoorState], None]


class DoorCommander(Protocol):
    async def set_door_state(self, device_id: str, state: VendorDoorState | int) -> None:
        ...


@dataclass(frozen=True, slots=True)
class AccessoryInformation:
    """Static metadata the hub shows for a door."""

    manufacturer: str
    model: str
    serial_number: str
    name: str


class DoorController:
    """Controls a single garage door.

    Parameters
    ----------
    accessory : AccessoryHandle
        Hub accessory this controller is attached to; its ``uuid`` keys
        the persisted state.
    device : Device
        Vendor snapshot; its ``id`` addresses control commands.
    client : DoorCommander
        Anything with ``set_door_state`` (normally :class:`GliderolClient`).
    store : StateStore
        Shared persistence for last known state.
    settle_duration : float
        Seconds to wait after an acknowledged command.
    on_current_state : callable, optional
        Receives every current-state projection (``OPENING``, ``OPEN`` ...).
    """

    def __init__(
        self,
        accessory: AccessoryHandle,
        device: Device,
        client: DoorCommander,
        store: StateStore,
        *,
        settle_duration: float = DEFAULT_SETTLE_DURATION,
        on_current_state: StateCallback | None = None,
    ) -> None:
        self._accessory = accessory
        self._device = device
        self._client = client
        self._store = store
        self._settle_duration = settle_duration
        self._on_current_state = on_current_state
        # Transitions on one door run one at a time.
        self._command_lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def identifier(self) -> str:
        return self._accessory.uuid

    @property
    def accessory(self) -> AccessoryHandle:
        return self._accessory

    @property
    def device(self) -> Device:
        return self._device

    @property
    def busy(self) -> bool:
        """Whether a transition is running or queued."""
        return self._command_lock.locked() or bool(self._pending)

    def accessory_information(self) -> AccessoryInformation:
        return AccessoryInformation(
            manufacturer=MANUFACTURER,
            model=self._device.outlet_type,
            serial_number=self._device.id,
            name=self._device.name,
        )

    async def initialize(self) -> DoorState:
        """Load and log the cached state; returns it."""
        state = await self._store.load(self.identifier)
        _logger.info("Loading the cached state for %s - State %s", self.identifier, state.name)
        return state

    # ------------------------------------------------------------------
    # Hub-facing reads
    # ------------------------------------------------------------------

    async def get_current_state(self) -> DoorState:
        _logger.debug("GET CurrentDoorState for %s", self.identifier)
        return await self._store.load(self.identifier)

    async def get_target_state(self) -> DoorState:
        # Only one value is stored; target reads the same as current.
        _logger.debug("GET TargetDoorState for %s", self.identifier)
        return await self._store.load(self.identifier)

    def get_obstruction_detected(self) -> bool:
        return False

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def request_target_state(self, value: TargetDoorState | int) -> None:
        """Start a transition in the background and return immediately."""
        task = asyncio.get_running_loop().create_task(self.set_target_state(value))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def join(self) -> None:
        """Wait for every transition started with :meth:`request_target_state`."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def set_target_state(self, value: TargetDoorState | int) -> DoorState:
        """Run one transition to completion and return the terminal state.

        Never raises for vendor or persistence failures; those are logged
        and resolved as described in the module docstring.
        """
        _logger.info("Set TargetDoorState for %s - %s", self.identifier, value)
        try:
            target = TargetDoorState(value)
        except ValueError:
            _logger.warning("Ignoring unsupported target state %r for %s", value, self.identifier)
            return await self._store.load(self.identifier)

        async with self._command_lock:
            return await self._transition(target)

    async def _transition(self, target: TargetDoorState) -> DoorState:
        self._emit(target.transitional)

        vendor_state = to_vendor_state(target)
        if await self._send_command(vendor_state):
            _logger.info("Waiting %.1fs for %s to settle", self._settle_duration, self.identifier)
            await asyncio.sleep(self._settle_duration)
            _logger.info("Wait completed for %s. State set to %s", self.identifier, target.name)
            final = target.door_state
        else:
            final = target.door_state.opposite()

        await self._persist(final)
        self._emit(final)
        return final

    async def _send_command(self, state: VendorDoorState) -> bool:
        try:
            await self._client.set_door_state(self._device.id, state)
        except GliderolError as exc:
            _logger.error("Error talking to Gliderol for %s: %s", self._device.id, exc)
            return False
        return True

    async def _persist(self, state: DoorState) -> None:
        try:
            await self._store.save(self.identifier, state)
        except GliderolError as exc:
            _logger.error("Error saving state for %s: %s", self.identifier, exc)

    def _emit(self, state: DoorState) -> None:
        if self._on_current_state is None:
            return
        try:
            self._on_current_state(state)
        except Exception:
            _logger.error("CurrentDoorState callback failed for %s", self.identifier, exc_info=True)
