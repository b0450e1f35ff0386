"""ghpulls — a typed client for the GitHub pull requests REST API."""
from __future__ import annotations

__version__ = "0.1.0"

from .client import PullRequestsClient  # noqa: E402
from .config import ClientConfig  # noqa: E402
from .errors import (  # noqa: E402
    AuthError,
    GhPullsError,
    InvalidRepositoryError,
    NetworkError,
    NotFoundError,
    RequestError,
    SerializationError,
)
from .repository import Repository  # noqa: E402

__all__ = [
    "AuthError",
    "ClientConfig",
    "GhPullsError",
    "InvalidRepositoryError",
    "NetworkError",
    "NotFoundError",
    "PullRequestsClient",
    "Repository",
    "RequestError",
    "SerializationError",
    "__version__",
]
