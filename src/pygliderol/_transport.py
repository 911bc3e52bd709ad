"""HTTP transport for the Gliderol REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pygliderol._redact import redact_headers, redact_url
from pygliderol.exceptions import GliderolTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw outcome of an HTTP exchange.

    ``body`` is the decoded JSON document, or ``None`` when the response
    text is empty or not JSON. Deciding whether the exchange was a
    success is left to the endpoint modules.
    """

    status: int
    body: Any
    text: str = ""


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        payload: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport with a per-request total timeout."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        payload: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        """Send one request and return status plus decoded body.

        Only network-level failures raise (:class:`GliderolTransportError`);
        non-200 statuses are returned to the caller.
        """
        data = json.dumps(payload, separators=(",", ":")) if payload is not None else None

        _logger.debug(
            "%s %s headers=%s body=%s",
            method,
            redact_url(url),
            redact_headers(headers),
            data,
        )

        try:
            async with self._http.request(
                method,
                url,
                data=data,
                headers=dict(headers),
                timeout=self._timeout,
            ) as resp:
                raw = await resp.read()
                status = resp.status
        except aiohttp.ClientError as exc:
            raise GliderolTransportError(
                f"{method} {redact_url(url)} failed: {exc}",
                endpoint=redact_url(url),
            ) from exc
        except TimeoutError as exc:
            raise GliderolTransportError(
                f"{method} {redact_url(url)} timed out after {self._timeout.total}s",
                endpoint=redact_url(url),
            ) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            _logger.warning("Undecodable response body from %s", redact_url(url))
            return TransportResponse(status=status, body=None, text=raw.decode("utf-8", errors="replace"))

        _logger.debug("HTTP %d from %s: %s", status, redact_url(url), text[:200])

        body: Any = None
        if text.strip():
            try:
                body = json.loads(text)
            except json.JSONDecodeError:
                _logger.debug("Non-JSON response from %s", redact_url(url))

        return TransportResponse(status=status, body=body, text=text)
