"""Shared factories and fixtures for the test suite."""
from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
import respx

from ghpulls.client import PullRequestsClient
from ghpulls.config import ClientConfig
from ghpulls.models import BranchRef, Comment, Commit, MergeResult, PullRequest, PullRequestFile, User

API_URL = "https://api.github.com"
FIXTURES = Path(__file__).parent / "fixtures"

# ---------------------------------------------------------------------------
# REST payload factories — return raw dicts that mirror API responses
# ---------------------------------------------------------------------------


def user_payload(login: str = "octocat", id: int = 583231) -> dict:
    return {"login": login, "id": id, "type": "User", "site_admin": False}


def branch_payload(ref: str = "master", sha: str = "6dcb09b5b57875f334f61aebed695e2e4193db5e") -> dict:
    return {"label": f"api-playground:{ref}", "ref": ref, "sha": sha, "user": user_payload()}


def pull_request_payload(
    number: int = 1,
    title: str = "The Title",
    body: str | None = "The Body",
    state: str = "open",
    merged: bool | None = False,
    head: str = "cool-branch",
    base: str = "master",
    **extra,
) -> dict:
    payload = {
        "id": 1000 + number,
        "number": number,
        "title": title,
        "body": body,
        "state": state,
        "html_url": f"https://github.com/api-playground/api-sandbox/pull/{number}",
        "user": user_payload(),
        "head": branch_payload(head, "e3215d187fbe5cbe7b3522f8966452c2eeff7faf"),
        "base": branch_payload(base),
        "draft": False,
        "merged": merged,
        "mergeable": True,
        "created_at": "2013-08-22T15:42:38Z",
        "updated_at": "2013-08-22T15:42:38Z",
        "merged_at": None,
        "_links": {"self": {"href": "https://api.github.com/repos/api-playground/api-sandbox/pulls/1"}},
    }
    if merged is None:
        del payload["merged"]
    payload.update(extra)
    return payload


def comment_payload(
    id: int = 4038128,
    body: str = "Hawt",
    path: str | None = "README",
    position: int | None = 1,
    commit_id: str | None = "e3215d187fbe5cbe7b3522f8966452c2eeff7faf",
    in_reply_to_id: int | None = None,
    **extra,
) -> dict:
    payload = {
        "id": id,
        "body": body,
        "path": path,
        "position": position,
        "original_position": position,
        "commit_id": commit_id,
        "original_commit_id": commit_id,
        "user": user_payload(),
        "diff_hunk": "@@ -1 +1,2 @@\n This is a sandbox\n+for testing",
        "html_url": f"https://github.com/api-playground/api-sandbox/pull/1#discussion_r{id}",
        "created_at": "2013-08-22T16:01:12Z",
        "updated_at": "2013-08-22T16:01:12Z",
    }
    if in_reply_to_id is not None:
        payload["in_reply_to_id"] = in_reply_to_id
    payload.update(extra)
    return payload


def commit_payload(sha: str = "e3215d187fbe5cbe7b3522f8966452c2eeff7faf", message: str = "Update README") -> dict:
    return {
        "sha": sha,
        "commit": {
            "message": message,
            "author": {"name": "Wynn Netherland", "email": "wynn@example.com", "date": "2013-08-22T15:40:00Z"},
            "committer": {"name": "Wynn Netherland", "email": "wynn@example.com", "date": "2013-08-22T15:40:00Z"},
        },
        "html_url": f"https://github.com/pengwynn/octokit/commit/{sha}",
        "parents": [],
    }


def file_payload(filename: str = "README", additions: int = 1, deletions: int = 0, status: str = "modified") -> dict:
    return {
        "sha": "ad6ef7d7c2fbfb1f0a8cbb1e45eab2fa2f0c53b2",
        "filename": filename,
        "status": status,
        "additions": additions,
        "deletions": deletions,
        "changes": additions + deletions,
        "blob_url": f"https://github.com/api-playground/api-sandbox/blob/e3215d1/{filename}",
        "patch": "@@ -1 +1,2 @@\n This is a sandbox\n+for testing",
    }


def merge_payload(sha: str = "6dcb09b5b57875f334f61aebed695e2e4193db5e") -> dict:
    return {"sha": sha, "merged": True, "message": "Pull Request successfully merged"}


# ---------------------------------------------------------------------------
# Model object factories — construct typed model instances
# ---------------------------------------------------------------------------


def make_pull_request(
    number: int = 1,
    title: str = "Fix bug",
    state: str = "open",
    body: str | None = "Fixes the bug",
    author: str | None = "alice",
    merged_at: str | None = None,
    additions: int | None = 10,
    deletions: int | None = 5,
    changed_files: int | None = 2,
) -> PullRequest:
    return PullRequest(
        id=1000 + number,
        number=number,
        title=title,
        state=state,
        body=body,
        html_url=f"https://github.com/owner/repo/pull/{number}",
        user=User(login=author, id=1) if author else None,
        head=BranchRef(ref="feature", sha="abc1234"),
        base=BranchRef(ref="main", sha="def5678"),
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-02T00:00:00Z",
        merged_at=merged_at,
        additions=additions,
        deletions=deletions,
        changed_files=changed_files,
    )


def make_comment(
    id: int = 1,
    body: str = "Fix this",
    author: str | None = "reviewer",
    path: str | None = "src/foo.py",
    position: int | None = 4,
    in_reply_to_id: int | None = None,
) -> Comment:
    return Comment(
        id=id,
        body=body,
        path=path,
        position=position,
        commit_id="abc1234",
        in_reply_to_id=in_reply_to_id,
        user=User(login=author) if author else None,
        diff_hunk="@@ -1,3 +1,4 @@\n context\n+new line",
        html_url=f"https://github.com/owner/repo/pull/1#discussion_r{id}",
        created_at="2024-01-01T11:00:00Z",
    )


def make_commit(sha: str = "abc1234def5678", message: str = "Fix bug\n\nLonger text", author: str | None = "alice") -> Commit:
    return Commit(sha=sha, message=message, author_name=author, authored_at="2024-01-01T00:00:00Z")


def make_file(filename: str = "src/foo.py", additions: int = 3, deletions: int = 1, status: str | None = "modified") -> PullRequestFile:
    return PullRequestFile(filename=filename, additions=additions, deletions=deletions, status=status)


def make_merge_result(sha: str = "abc1234", merged: bool = True) -> MergeResult:
    return MergeResult(sha=sha, merged=merged, message="Pull Request successfully merged")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    with PullRequestsClient(ClientConfig(token="token")) as c:
        yield c


@pytest.fixture
def recorded_api():
    """Replay the recorded cassette; every request must match a recorded one."""
    cassette = json.loads((FIXTURES / "pull_requests.json").read_text(encoding="utf-8"))
    with respx.mock(base_url=API_URL, assert_all_called=False) as router:
        for interaction in cassette["interactions"]:
            request, response = interaction["request"], interaction["response"]
            lookups = {"method": request["method"], "path": request["path"]}
            if "json" in request:
                lookups["json"] = request["json"]
            if "params" in request:
                lookups["params"] = request["params"]
            router.route(**lookups).mock(
                return_value=httpx.Response(response["status"], json=response.get("json"))
            )
        yield router


@pytest.fixture(autouse=True)
def no_dotenv(mocker):
    """Prevent tests from loading a real .env file."""
    mocker.patch("ghpulls.cli.load_dotenv")
