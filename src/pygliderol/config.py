"""Client configuration for pygliderol."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pygliderol._constants import (
    APP_NAME,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SETTLE_DURATION,
    DEFAULT_STATE_FILE,
)
from pygliderol.exceptions import GliderolConfigError


@dataclasses.dataclass(frozen=True)
class GliderolConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Vendor API base URL, without the ``/prod/API`` suffix.
    mobile_number : str
        Mobile number the Gliderol account is registered with. A
        leading ``+`` is accepted and stripped when building URLs.
    api_key : str
        API key sent verbatim in the ``Authorization`` header.
    state_file : str
        Path of the text file holding the last known state of each door.
        Parent directories are created on first write.
    settle_duration : float
        Seconds to wait after a successful command before the door is
        considered to have reached its target. No confirmation is polled
        from the vendor during this time.
    request_timeout : float
        Total timeout in seconds applied to every vendor request.
    app_name : str
        Value of the ``appName`` query parameter.
    """

    base_url: str
    mobile_number: str
    api_key: str
    state_file: str = DEFAULT_STATE_FILE
    settle_duration: float = DEFAULT_SETTLE_DURATION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    app_name: str = APP_NAME

    @property
    def mobile_identifier(self) -> str:
        """Mobile number as used in URL paths (leading ``+`` removed)."""
        return self.mobile_number.strip().removeprefix("+")

    @property
    def api_root(self) -> str:
        """``{base_url}/prod/API/{mobile}`` with no trailing slash."""
        return f"{self.base_url.rstrip('/')}/prod/API/{self.mobile_identifier}"

    def validate(self) -> GliderolConfig:
        """Raise :class:`GliderolConfigError` if a required field is unusable."""
        missing = [name for name in ("base_url", "mobile_number", "api_key") if not str(getattr(self, name)).strip()]
        if missing:
            raise GliderolConfigError(f"Missing required configuration: {', '.join(missing)}")
        if self.settle_duration < 0:
            raise GliderolConfigError(f"settle_duration must be >= 0, got {self.settle_duration}")
        if self.request_timeout <= 0:
            raise GliderolConfigError(f"request_timeout must be > 0, got {self.request_timeout}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> GliderolConfig:
        """Create configuration from environment variables.

        Reads ``GLIDEROL_BASE_URL``, ``GLIDEROL_MOBILE_NUMBER``,
        ``GLIDEROL_API_KEY`` and the optional ``GLIDEROL_*`` tuning
        variables. Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "GLIDEROL_BASE_URL": "base_url",
            "GLIDEROL_MOBILE_NUMBER": "mobile_number",
            "GLIDEROL_API_KEY": "api_key",
            "GLIDEROL_STATE_FILE": "state_file",
            "GLIDEROL_APP_NAME": "app_name",
        }
        config_kwargs: dict[str, Any] = {"base_url": "", "mobile_number": "", "api_key": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # numeric fields, handled separately
        for env_key, field_name in (
            ("GLIDEROL_SETTLE_DURATION", "settle_duration"),
            ("GLIDEROL_REQUEST_TIMEOUT", "request_timeout"),
        ):
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise GliderolConfigError(f"{env_key} must be a number, got {val!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
