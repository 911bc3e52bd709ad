"""Shared helpers for Gliderol API endpoint modules.

This module centralizes:
- the vendor-mandated request headers
- building endpoint URLs with the ``appName`` query parameter
- turning a raw :class:`TransportResponse` into a validated envelope

It is internal to pygliderol and may change at any time.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import ValidationError

from pygliderol._constants import USER_AGENT
from pygliderol._redact import redact_url
from pygliderol._transport import TransportResponse
from pygliderol.config import GliderolConfig
from pygliderol.exceptions import GliderolApiError
from pygliderol.models.responses import VendorResponse

TResponse = TypeVar("TResponse", bound=VendorResponse)


def build_url(config: GliderolConfig, path: str) -> str:
    """``{api_root}/{path}?appName=...``; *path* may end with a slash."""
    return f"{config.api_root}/{path.lstrip('/')}?appName={config.app_name}"


def auth_headers(config: GliderolConfig) -> dict[str, str]:
    return {
        "Authorization": config.api_key,
        "User-Agent": USER_AGENT,
    }


def parse_envelope(
    response: TransportResponse,
    model: type[TResponse],
    *,
    url: str,
    error_cls: type[GliderolApiError] = GliderolApiError,
) -> TResponse:
    """Validate *response* as *model*, requiring HTTP 200 and ``ok: true``.

    Raises
    ------
    GliderolApiError
        (or *error_cls*) for any other status, a body that is not a JSON
        object, or ``ok`` not being ``true``.
    """
    endpoint = redact_url(url)
    if response.status != 200:
        raise error_cls(
            f"HTTP {response.status} from {endpoint}: {response.text[:200]}",
            status_code=response.status,
            body=response.body,
            endpoint=endpoint,
        )
    if not isinstance(response.body, dict):
        raise error_cls(
            f"Unexpected response body from {endpoint}: {response.text[:200]}",
            status_code=response.status,
            body=response.body,
            endpoint=endpoint,
        )
    try:
        envelope = model.model_validate(response.body)
    except ValidationError as exc:
        raise error_cls(
            f"Malformed response from {endpoint}: {exc.error_count()} validation error(s)",
            status_code=response.status,
            body=response.body,
            endpoint=endpoint,
        ) from exc
    if not envelope.ok:
        raise error_cls(
            f"{endpoint} answered ok=false: {response.text[:200]}",
            status_code=response.status,
            body=response.body,
            endpoint=endpoint,
        )
    return envelope
