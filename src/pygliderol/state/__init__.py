"""State/store layer.

Durable last-known door state, keyed by accessory identifier. Door
controllers are the only writers; everything else reads.
"""

from pygliderol.state.store import FileStateStore, MemoryStateStore, StateRecord, StateStore

__all__ = ["FileStateStore", "MemoryStateStore", "StateRecord", "StateStore"]
