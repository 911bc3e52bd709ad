"""Durable per-door state store.

The on-disk format is plain text, one record per line::

    0e5d1f6c-1a2b-3c4d-5e6f-7a8b9c0d1e2f, 1

The value uses hub encoding (``0`` open, ``1`` closed). A missing file or
missing record means :data:`DEFAULT_DOOR_STATE`.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pygliderol.exceptions import GliderolPersistenceError
from pygliderol.models.door import DEFAULT_DOOR_STATE, DoorState

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StateRecord:
    """One persisted ``(identifier, state)`` pair."""

    identifier: str
    state: DoorState

    def to_line(self) -> str:
        return f"{self.identifier}, {int(self.state)}"

    @classmethod
    def parse_line(cls, line: str) -> StateRecord | None:
        """Parse a line, returning ``None`` if it is blank or malformed."""
        identifier, sep, value = line.partition(",")
        identifier = identifier.strip()
        if not sep or not identifier:
            return None
        # tolerate a trailing separator, e.g. "abc, 1,"
        value = value.strip().rstrip(",").strip()
        try:
            state = DoorState(int(value))
        except ValueError:
            return None
        if not state.is_terminal:
            return None
        return cls(identifier=identifier, state=state)


class StateStore(Protocol):
    """Interface door controllers persist through."""

    async def load(self, identifier: str) -> DoorState:
        ...

    async def save(self, identifier: str, state: DoorState) -> None:
        ...


def _require_terminal(state: DoorState) -> DoorState:
    state = DoorState(state)
    if not state.is_terminal:
        raise ValueError(f"only OPEN or CLOSED can be persisted, got {state.name}")
    return state


class FileStateStore:
    """Text-file backed store shared by every door controller in the process.

    All reads and read-modify-write cycles are serialized through one
    lock, and writes replace the file atomically so a crash never leaves
    a truncated store behind.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Blocking helpers (run in a worker thread)
    # ------------------------------------------------------------------

    def _read_lines(self) -> list[str] | None:
        """Return the file's lines, or ``None`` if it does not exist."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        return text.split("\n")

    def _load_sync(self, identifier: str) -> DoorState:
        try:
            lines = self._read_lines()
        except (OSError, UnicodeDecodeError) as exc:
            _logger.error("Error loading state for %s from %s: %s", identifier, self._path, exc)
            return DEFAULT_DOOR_STATE

        if lines is None:
            _logger.debug("No state file exists at %s", self._path)
            return DEFAULT_DOOR_STATE

        for line in lines:
            record = StateRecord.parse_line(line)
            if record is not None and record.identifier == identifier:
                return record.state
            if record is None and line.partition(",")[0].strip() == identifier:
                _logger.warning("Ignoring unreadable state record for %s: %r", identifier, line)
        return DEFAULT_DOOR_STATE

    def _save_sync(self, identifier: str, state: DoorState) -> None:
        lines = self._read_lines() or []
        # drop trailing blank lines so repeated saves don't grow the file
        while lines and not lines[-1].strip():
            lines.pop()

        new_line = StateRecord(identifier, state).to_line()
        updated: list[str] = []
        found = False
        for line in lines:
            if line.partition(",")[0].strip() != identifier:
                updated.append(line)
            elif not found:
                updated.append(new_line)
                found = True
        if not found:
            updated.append(new_line)
        lines = updated

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write("\n".join(lines))
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def load(self, identifier: str) -> DoorState:
        """Last persisted state for *identifier*; never raises."""
        async with self._lock:
            return await asyncio.to_thread(self._load_sync, identifier)

    async def save(self, identifier: str, state: DoorState) -> None:
        """Upsert the record for *identifier*, keeping all others.

        Raises
        ------
        GliderolPersistenceError
            If the existing file could not be read or the new one could
            not be written.
        ValueError
            If *state* is a transient state.
        """
        state = _require_terminal(state)
        async with self._lock:
            try:
                await asyncio.to_thread(self._save_sync, identifier, state)
            except (OSError, UnicodeDecodeError) as exc:
                raise GliderolPersistenceError(
                    f"Error saving state for {identifier} to {self._path}: {exc}",
                    path=str(self._path),
                ) from exc
        _logger.debug("Saved state %s for %s", state.name, identifier)


class MemoryStateStore:
    """In-process store with the same semantics, nothing is written to disk."""

    def __init__(self, initial: dict[str, DoorState] | None = None) -> None:
        self._states: dict[str, DoorState] = dict(initial or {})

    async def load(self, identifier: str) -> DoorState:
        return self._states.get(identifier, DEFAULT_DOOR_STATE)

    async def save(self, identifier: str, state: DoorState) -> None:
        self._states[identifier] = _require_terminal(state)

    def snapshot(self) -> dict[str, DoorState]:
        return dict(self._states)
