from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config import ClientConfig
from .errors import NetworkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: Any
    content: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport:
    """Performs the HTTP exchange for the resource client.

    Owns authentication headers and the connection pool. It never interprets
    status codes; that is left to the caller.
    """

    def __init__(self, config: ClientConfig, client: httpx.Client | None = None) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": config.api_version,
            "User-Agent": config.user_agent,
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"

        # Sent per request so an injected client is left untouched.
        self._headers = headers
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(base_url=config.api_url, timeout=httpx.Timeout(config.timeout))
        self._client = client

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> TransportResponse:
        try:
            response = self._client.request(method, path, params=params or None, json=json, headers=self._headers)
        except httpx.RequestError as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, response.request.url, response.status_code)

        content = response.content
        body: Any = None
        if content.strip():
            try:
                body = response.json()
            except ValueError:
                logger.debug("%s %s returned a non-JSON body", method, path)

        return TransportResponse(
            status_code=response.status_code,
            body=body,
            content=content,
            headers=dict(response.headers),
        )
