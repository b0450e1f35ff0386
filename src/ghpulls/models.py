"""Typed records for pull request resources.

Each record is built from a decoded JSON object by its ``from_api`` class
method. Fields the records do not know about are ignored, so new keys added
by the API never break parsing. Missing or mistyped required fields raise
``SerializationError``.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import SerializationError

T = TypeVar("T")

_MISSING = object()
_INT_STRING = re.compile(r"-?\d+", re.ASCII)


def _expect_object(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise SerializationError(f"Expected a JSON object for {kind}, got {type(data).__name__}.")
    return data


def _int(data: Mapping[str, Any], key: str, kind: str, *, required: bool = True) -> int | None:
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if required:
            raise SerializationError(f"{kind} is missing required field {key!r}.")
        return None
    if isinstance(value, bool):
        raise SerializationError(f"{kind}.{key} must be an integer, got a boolean.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_STRING.fullmatch(value.strip()):
        return int(value)
    raise SerializationError(f"{kind}.{key} must be an integer, got {value!r}.")


def _str(data: Mapping[str, Any], key: str, kind: str, *, required: bool = True) -> str | None:
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if required:
            raise SerializationError(f"{kind} is missing required field {key!r}.")
        return None
    if not isinstance(value, str):
        raise SerializationError(f"{kind}.{key} must be a string, got {type(value).__name__}.")
    return value


def _bool(data: Mapping[str, Any], key: str, kind: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise SerializationError(f"{kind}.{key} must be a boolean, got {value!r}.")
    return value


def _nested(
    data: Mapping[str, Any], key: str, parse: Callable[[Any], T]
) -> T | None:
    value = data.get(key)
    if value is None:
        return None
    return parse(value)


def parse_list(data: Any, parse: Callable[[Any], T], kind: str) -> list[T]:
    """Parse a JSON array, keeping the order the API delivered."""
    if not isinstance(data, list):
        raise SerializationError(f"Expected a JSON array of {kind}, got {type(data).__name__}.")
    return [parse(item) for item in data]


@dataclass(frozen=True)
class User:
    login: str
    id: int | None = None

    @classmethod
    def from_api(cls, data: Any) -> User:
        obj = _expect_object(data, "User")
        return cls(login=_str(obj, "login", "User"), id=_int(obj, "id", "User", required=False))


@dataclass(frozen=True)
class BranchRef:
    ref: str
    sha: str
    label: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> BranchRef:
        obj = _expect_object(data, "BranchRef")
        return cls(
            ref=_str(obj, "ref", "BranchRef"),
            sha=_str(obj, "sha", "BranchRef"),
            label=_str(obj, "label", "BranchRef", required=False),
        )


@dataclass(frozen=True)
class PullRequest:
    id: int
    number: int
    title: str
    state: str
    body: str | None = None
    html_url: str | None = None
    user: User | None = None
    head: BranchRef | None = None
    base: BranchRef | None = None
    draft: bool | None = None
    merged: bool | None = None
    mergeable: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None
    merged_at: str | None = None
    # Only present on single pull request responses.
    commits: int | None = None
    additions: int | None = None
    deletions: int | None = None
    changed_files: int | None = None

    @classmethod
    def from_api(cls, data: Any) -> PullRequest:
        kind = "PullRequest"
        obj = _expect_object(data, kind)
        return cls(
            id=_int(obj, "id", kind),
            number=_int(obj, "number", kind),
            title=_str(obj, "title", kind),
            state=_str(obj, "state", kind),
            body=_str(obj, "body", kind, required=False),
            html_url=_str(obj, "html_url", kind, required=False),
            user=_nested(obj, "user", User.from_api),
            head=_nested(obj, "head", BranchRef.from_api),
            base=_nested(obj, "base", BranchRef.from_api),
            draft=_bool(obj, "draft", kind),
            merged=_bool(obj, "merged", kind),
            mergeable=_bool(obj, "mergeable", kind),
            created_at=_str(obj, "created_at", kind, required=False),
            updated_at=_str(obj, "updated_at", kind, required=False),
            merged_at=_str(obj, "merged_at", kind, required=False),
            commits=_int(obj, "commits", kind, required=False),
            additions=_int(obj, "additions", kind, required=False),
            deletions=_int(obj, "deletions", kind, required=False),
            changed_files=_int(obj, "changed_files", kind, required=False),
        )


@dataclass(frozen=True)
class Comment:
    """A review comment attached to a line of a pull request diff."""

    id: int
    body: str
    path: str | None = None
    position: int | None = None
    commit_id: str | None = None
    in_reply_to_id: int | None = None
    user: User | None = None
    diff_hunk: str | None = None
    html_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> Comment:
        kind = "Comment"
        obj = _expect_object(data, kind)
        return cls(
            id=_int(obj, "id", kind),
            body=_str(obj, "body", kind),
            path=_str(obj, "path", kind, required=False),
            position=_int(obj, "position", kind, required=False),
            commit_id=_str(obj, "commit_id", kind, required=False),
            in_reply_to_id=_int(obj, "in_reply_to_id", kind, required=False),
            user=_nested(obj, "user", User.from_api),
            diff_hunk=_str(obj, "diff_hunk", kind, required=False),
            html_url=_str(obj, "html_url", kind, required=False),
            created_at=_str(obj, "created_at", kind, required=False),
            updated_at=_str(obj, "updated_at", kind, required=False),
        )


@dataclass(frozen=True)
class Commit:
    sha: str
    message: str | None = None
    author_name: str | None = None
    authored_at: str | None = None
    html_url: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> Commit:
        kind = "Commit"
        obj = _expect_object(data, kind)
        detail = _expect_object(obj.get("commit") or {}, "Commit.commit")
        author = _expect_object(detail.get("author") or {}, "Commit.commit.author")
        return cls(
            sha=_str(obj, "sha", kind),
            message=_str(detail, "message", kind, required=False),
            author_name=_str(author, "name", kind, required=False),
            authored_at=_str(author, "date", kind, required=False),
            html_url=_str(obj, "html_url", kind, required=False),
        )


@dataclass(frozen=True)
class PullRequestFile:
    filename: str
    additions: int
    deletions: int
    status: str | None = None
    changes: int | None = None
    patch: str | None = None
    blob_url: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> PullRequestFile:
        kind = "PullRequestFile"
        obj = _expect_object(data, kind)
        filename = _str(obj, "filename", kind)
        if not filename:
            raise SerializationError(f"{kind}.filename must not be empty.")
        additions = _int(obj, "additions", kind)
        deletions = _int(obj, "deletions", kind)
        if additions < 0 or deletions < 0:
            raise SerializationError(f"{kind} {filename!r} has negative line counts.")
        return cls(
            filename=filename,
            additions=additions,
            deletions=deletions,
            status=_str(obj, "status", kind, required=False),
            changes=_int(obj, "changes", kind, required=False),
            patch=_str(obj, "patch", kind, required=False),
            blob_url=_str(obj, "blob_url", kind, required=False),
        )


@dataclass(frozen=True)
class MergeResult:
    sha: str
    merged: bool
    message: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> MergeResult:
        kind = "MergeResult"
        obj = _expect_object(data, kind)
        merged = _bool(obj, "merged", kind)
        return cls(
            sha=_str(obj, "sha", kind),
            merged=bool(merged),
            message=_str(obj, "message", kind, required=False),
        )
