"""Door state enums and the hub/vendor encoding bridge.

The hub and the Gliderol service number door states the opposite way
round::

    state     hub   vendor
    open       0      1
    closed     1      0

:func:`to_vendor_state` and :func:`from_vendor_state` are the only
places that cross between the two.
"""

from __future__ import annotations

import enum


class DoorState(enum.IntEnum):
    """Current door state in hub encoding.

    ``OPENING`` and ``CLOSING`` are transient projections emitted while a
    command is in flight; they are never persisted.
    """

    OPEN = 0
    CLOSED = 1
    OPENING = 2
    CLOSING = 3

    @property
    def is_terminal(self) -> bool:
        return self in (DoorState.OPEN, DoorState.CLOSED)

    def opposite(self) -> DoorState:
        """The other terminal state (``OPENING`` counts as ``OPEN``)."""
        if self in (DoorState.OPEN, DoorState.OPENING):
            return DoorState.CLOSED
        return DoorState.OPEN


class TargetDoorState(enum.IntEnum):
    """Requested door state in hub encoding."""

    OPEN = 0
    CLOSED = 1

    @property
    def door_state(self) -> DoorState:
        return DoorState(int(self))

    @property
    def transitional(self) -> DoorState:
        """Projection shown while the door travels towards this target."""
        return DoorState.OPENING if self is TargetDoorState.OPEN else DoorState.CLOSING


class VendorDoorState(enum.IntEnum):
    """Door state as sent in ``{"state": N}`` to the control endpoint."""

    CLOSED = 0
    OPEN = 1


#: The sentinel default for a door that has never been seen before.
DEFAULT_DOOR_STATE = DoorState.CLOSED


def to_vendor_state(target: TargetDoorState) -> VendorDoorState:
    if target is TargetDoorState.OPEN:
        return VendorDoorState.OPEN
    return VendorDoorState.CLOSED


def from_vendor_state(state: VendorDoorState) -> TargetDoorState:
    if state is VendorDoorState.OPEN:
        return TargetDoorState.OPEN
    return TargetDoorState.CLOSED
