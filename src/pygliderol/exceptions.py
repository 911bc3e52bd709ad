"""Custom exception hierarchy for pygliderol."""

from __future__ import annotations

from typing import Any


class GliderolError(Exception):
    """Base exception for all pygliderol errors."""


class GliderolConfigError(GliderolError):
    """Invalid or missing configuration."""


class GliderolTransportError(GliderolError):
    """HTTP-level failure (connection refused, DNS, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class GliderolApiError(GliderolError):
    """The vendor answered, but not with ``200`` and ``{"ok": true}``."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        super().__init__(message)


class GliderolCommandError(GliderolApiError):
    """A door control command was rejected by the vendor service."""


class GliderolPersistenceError(GliderolError):
    """Reading or writing the local state file failed."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
