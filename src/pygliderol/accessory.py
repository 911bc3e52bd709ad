"""Hub-facing accessory identity.

The hub owns its accessory objects; pygliderol only needs a stable
identifier to match on and a mutable ``context`` to stash the device
snapshot in. :class:`AccessoryHandle` captures exactly that, and
:class:`Accessory` is a plain implementation for hosts without one.
"""

from __future__ import annotations

import hashlib
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pygliderol.models.device import Device

CONTEXT_DEVICE_KEY = "device"


def device_uuid(device_id: str) -> str:
    """Derive the accessory identifier for a vendor device id.

    The SHA-1 hex digest of the id fills the hub's
    ``xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx`` template: ``4`` is literal and
    ``y`` takes the variant bits. Identifiers already present in a state
    file written by the hub keep resolving to the same door.
    """
    digest = hashlib.sha1(device_id.encode("utf-8")).hexdigest()  # noqa: S324
    variant = format((int(digest[15], 16) & 0x3) | 0x8, "x")
    return f"{digest[0:8]}-{digest[8:12]}-4{digest[12:15]}-{variant}{digest[16:19]}-{digest[19:31]}"


@runtime_checkable
class AccessoryHandle(Protocol):
    """What pygliderol needs from a host accessory."""

    @property
    def uuid(self) -> str:
        ...

    @property
    def display_name(self) -> str:
        ...

    @property
    def context(self) -> MutableMapping[str, Any]:
        ...


@dataclass(eq=False)
class Accessory:
    """Minimal :class:`AccessoryHandle`; equality is by ``uuid``."""

    display_name: str
    uuid: str
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_device(cls, device: Device) -> Accessory:
        accessory = cls(display_name=device.display_name, uuid=device_uuid(device.id))
        accessory.context[CONTEXT_DEVICE_KEY] = device.to_context()
        return accessory

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Accessory):
            return NotImplemented
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

