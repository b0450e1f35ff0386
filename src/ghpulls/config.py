from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_TIMEOUT = 30.0


def _default_user_agent() -> str:
    from . import __version__

    return f"ghpulls/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    """Settings for one client instance.

    Nothing here is read from the process environment unless ``from_env`` is
    called explicitly.
    """

    token: str | None = None
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = field(default_factory=_default_user_agent)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        env = os.environ if environ is None else environ

        timeout = DEFAULT_TIMEOUT
        if raw_timeout := env.get("GHPULLS_TIMEOUT"):
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"GHPULLS_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None
            if timeout <= 0:
                raise ValueError(f"GHPULLS_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            token=env.get("GITHUB_TOKEN") or None,
            api_url=(env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            timeout=timeout,
        )
