from __future__ import annotations

from typing import Any


class GhPullsError(Exception):
    """Base class for every error raised by ghpulls."""


class RequestError(GhPullsError):
    """The API answered with a status outside 2xx."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: list[Any] | None = None,
        documentation_url: str | None = None,
    ) -> None:
        super().__init__(f"GitHub API returned HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        self.documentation_url = documentation_url


class AuthError(RequestError):
    pass


class NotFoundError(RequestError):
    pass


class SerializationError(GhPullsError):
    """A response body did not have the expected shape."""


class NetworkError(GhPullsError):
    pass


class InvalidRepositoryError(GhPullsError, ValueError):
    pass
