from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from .config import ClientConfig
from .errors import AuthError, NotFoundError, RequestError, SerializationError
from .models import Comment, Commit, MergeResult, PullRequest, PullRequestFile, parse_list
from .repository import Repository, RepositoryLike
from .transport import Transport, TransportResponse

T = TypeVar("T")


class PullRequestsClient:
    """Maps pull request operations onto the GitHub REST API.

    Every method performs exactly one HTTP request and keeps no state between
    calls. Non-2xx answers raise ``RequestError``; bodies that do not parse
    into the expected record raise ``SerializationError``.
    """

    def __init__(self, config: ClientConfig | None = None, transport: Transport | None = None) -> None:
        self.config = config or ClientConfig()
        self._owns_transport = transport is None
        self._transport = transport or Transport(self.config)

    def __enter__(self) -> PullRequestsClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------

    def create_pull_request(
        self, repo: RepositoryLike, base: str, head: str, title: str, body: str | None = None
    ) -> PullRequest:
        payload = _compact({"base": base, "head": head, "title": title, "body": body})
        response = self._send("POST", _pulls_path(repo), json=payload)
        return self._one(response, PullRequest.from_api)

    def create_pull_request_for_issue(self, repo: RepositoryLike, base: str, head: str, issue: int) -> PullRequest:
        """Turn an existing issue into a pull request."""
        payload = {"base": base, "head": head, "issue": _number(issue, "issue")}
        response = self._send("POST", _pulls_path(repo), json=payload)
        return self._one(response, PullRequest.from_api)

    def pull_request(self, repo: RepositoryLike, number: int) -> PullRequest:
        response = self._send("GET", _pulls_path(repo, number))
        return self._one(response, PullRequest.from_api)

    pull = pull_request

    def update_pull_request(
        self,
        repo: RepositoryLike,
        number: int,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
    ) -> PullRequest:
        """Send only the given fields.

        Whether omitted fields are kept is decided by the API, not here.
        """
        payload = _compact({"title": title, "body": body, "state": state})
        response = self._send("PATCH", _pulls_path(repo, number), json=payload)
        return self._one(response, PullRequest.from_api)

    def close_pull_request(self, repo: RepositoryLike, number: int) -> PullRequest:
        return self.update_pull_request(repo, number, state="closed")

    def pull_merged(self, repo: RepositoryLike, number: int) -> bool:
        response = self._send("GET", _pulls_path(repo, number, "merge"))
        return self._boolean(response)

    def merge_pull_request(
        self, repo: RepositoryLike, number: int, commit_message: str | None = None
    ) -> MergeResult:
        payload = _compact({"commit_message": commit_message})
        response = self._send("PUT", _pulls_path(repo, number, "merge"), json=payload)
        return self._one(response, MergeResult.from_api)

    def pull_requests(
        self,
        repo: RepositoryLike,
        state: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> list[PullRequest]:
        params = _compact(
            {"state": state, "sort": sort, "direction": direction, "page": page, "per_page": per_page}
        )
        response = self._send("GET", _pulls_path(repo), params=params)
        return self._many(response, PullRequest.from_api, "pull requests")

    pulls = pull_requests

    def pull_request_commits(self, repo: RepositoryLike, number: int) -> list[Commit]:
        response = self._send("GET", _pulls_path(repo, number, "commits"))
        return self._many(response, Commit.from_api, "commits")

    pull_commits = pull_request_commits

    def pull_request_files(self, repo: RepositoryLike, number: int) -> list[PullRequestFile]:
        response = self._send("GET", _pulls_path(repo, number, "files"))
        return self._many(response, PullRequestFile.from_api, "files")

    # ------------------------------------------------------------------
    # Review comments
    # ------------------------------------------------------------------

    def pull_requests_comments(
        self,
        repo: RepositoryLike,
        sort: str | None = None,
        direction: str | None = None,
        since: datetime | str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> list[Comment]:
        """List review comments across every pull request of ``repo``."""
        if isinstance(since, datetime):
            if since.tzinfo is not None:
                since = since.astimezone(timezone.utc)
            since = since.strftime("%Y-%m-%dT%H:%M:%SZ")
        params = _compact(
            {"sort": sort, "direction": direction, "since": since, "page": page, "per_page": per_page}
        )
        response = self._send("GET", _pulls_path(repo, suffix="comments"), params=params)
        return self._many(response, Comment.from_api, "comments")

    review_comments = pull_requests_comments

    def pull_request_comments(self, repo: RepositoryLike, number: int) -> list[Comment]:
        response = self._send("GET", _pulls_path(repo, number, "comments"))
        return self._many(response, Comment.from_api, "comments")

    pull_comments = pull_request_comments

    def pull_request_comment(self, repo: RepositoryLike, comment_id: int) -> Comment:
        response = self._send("GET", _comment_path(repo, comment_id))
        return self._one(response, Comment.from_api)

    def create_pull_request_comment(
        self,
        repo: RepositoryLike,
        number: int,
        body: str,
        commit_id: str,
        path: str,
        position: int,
    ) -> Comment:
        payload = {"body": body, "commit_id": commit_id, "path": path, "position": position}
        response = self._send("POST", _pulls_path(repo, number, "comments"), json=payload)
        return self._one(response, Comment.from_api)

    def create_pull_request_comment_reply(
        self, repo: RepositoryLike, number: int, body: str, in_reply_to: int
    ) -> Comment:
        payload = {"body": body, "in_reply_to": _number(in_reply_to, "in_reply_to")}
        response = self._send("POST", _pulls_path(repo, number, "comments"), json=payload)
        return self._one(response, Comment.from_api)

    def update_pull_request_comment(self, repo: RepositoryLike, comment_id: int, body: str) -> Comment:
        response = self._send("PATCH", _comment_path(repo, comment_id), json={"body": body})
        return self._one(response, Comment.from_api)

    def delete_pull_request_comment(self, repo: RepositoryLike, comment_id: int) -> bool:
        response = self._send("DELETE", _comment_path(repo, comment_id))
        return self._boolean(response)

    # ------------------------------------------------------------------
    # Response handling
    # ------------------------------------------------------------------

    def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> TransportResponse:
        return self._transport.request(method, path, params=params, json=json)

    def _one(self, response: TransportResponse, parse: Callable[[Any], T]) -> T:
        _raise_for_status(response)
        return parse(_json_body(response))

    def _many(self, response: TransportResponse, parse: Callable[[Any], T], kind: str) -> list[T]:
        _raise_for_status(response)
        return parse_list(_json_body(response), parse, kind)

    @staticmethod
    def _boolean(response: TransportResponse) -> bool:
        # 404 is how the API says "no" for merge checks and already deleted comments.
        if response.status_code == 404:
            return False
        _raise_for_status(response)
        return True


def _raise_for_status(response: TransportResponse) -> None:
    if response.ok:
        return

    body = response.body if isinstance(response.body, dict) else {}
    message = body.get("message") or response.content.decode("utf-8", errors="replace").strip()
    if not message:
        message = "no error message"
    kwargs: dict[str, Any] = {
        "errors": body.get("errors"),
        "documentation_url": body.get("documentation_url"),
    }

    if response.status_code == 401:
        raise AuthError(response.status_code, message, **kwargs)
    if response.status_code == 404:
        raise NotFoundError(response.status_code, message, **kwargs)
    raise RequestError(response.status_code, message, **kwargs)


def _json_body(response: TransportResponse) -> Any:
    if response.body is None:
        if response.content.strip():
            raise SerializationError(f"HTTP {response.status_code} response body is not valid JSON.")
        raise SerializationError(f"HTTP {response.status_code} response has an empty body.")
    return response.body


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _number(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}.")
    return value


def _pulls_path(repo: RepositoryLike, number: int | None = None, suffix: str | None = None) -> str:
    path = f"{Repository.parse(repo).path}/pulls"
    if number is not None:
        path += f"/{_number(number, 'number')}"
    if suffix:
        path += f"/{suffix}"
    return path


def _comment_path(repo: RepositoryLike, comment_id: int) -> str:
    return f"{_pulls_path(repo, suffix='comments')}/{_number(comment_id, 'comment_id')}"
