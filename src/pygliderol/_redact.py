"""Helpers for safe debug logging.

Requests to the Gliderol service carry the account's API key and the
mobile number it is registered with. This module redacts those before
they reach DEBUG logs.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "api_key",
        "apikey",
        "mobile_number",
        "mobilenumber",
        "cookie",
    }
)

# /prod/API/<mobile>/... path segment
_MOBILE_IN_PATH = re.compile(r"(/prod/API/)[^/?]+")


def redact_url(url: str) -> str:
    """Mask the mobile-number path segment of a vendor URL."""
    return _MOBILE_IN_PATH.sub(r"\1<redacted>", url)


def redact_headers(headers: Mapping[str, str], *, max_value: int = 200) -> dict[str, str]:
    """Copy *headers* with credential values masked and long values cut."""
    safe: dict[str, str] = {}
    for name, value in headers.items():
        if name.lower().replace("-", "_") in _SENSITIVE_VALUE_KEYS:
            safe[name] = "<redacted>"
        elif len(value) > max_value:
            safe[name] = value[:max_value] + "...<truncated>"
        else:
            safe[name] = value
    return safe
