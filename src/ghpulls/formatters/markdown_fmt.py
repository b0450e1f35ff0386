from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from ..models import Comment, Commit, MergeResult, PullRequest, PullRequestFile


def format_markdown(records: Sequence[Any], owner_repo: str = "", heading: str = "Pull Requests") -> str:
    now = datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    lines: list[str] = []

    title = f"{heading}: {owner_repo}" if owner_repo else heading
    lines.append(f"# {title}")
    lines.append(f"> {len(records)} record(s) · Generated: {now}")
    lines.append("")

    for record in records:
        if isinstance(record, PullRequest):
            lines.extend(_pull_request_lines(record))
        elif isinstance(record, Comment):
            lines.extend(_comment_lines(record))
        elif isinstance(record, Commit):
            lines.extend(_commit_lines(record))
        elif isinstance(record, PullRequestFile):
            lines.extend(_file_lines(record))
        elif isinstance(record, MergeResult):
            lines.extend(_merge_lines(record))
        else:
            raise TypeError(f"Cannot render {type(record).__name__} as Markdown")

    return "\n".join(lines)


def _pull_request_lines(pr: PullRequest) -> list[str]:
    lines = [f"## PR #{pr.number} — {pr.title}", "", "| Field | Value |", "| --- | --- |"]
    lines.append(f"| Author | {pr.user.login if pr.user else 'ghost'} |")
    lines.append(f"| State | {pr.state} |")
    if pr.head and pr.base:
        lines.append(f"| Branches | `{pr.head.ref}` → `{pr.base.ref}` |")
    if pr.created_at:
        lines.append(f"| Created | {pr.created_at} |")
    if pr.updated_at:
        lines.append(f"| Updated | {pr.updated_at} |")
    if pr.merged_at:
        lines.append(f"| Merged | {pr.merged_at} |")
    if pr.changed_files is not None:
        lines.append(f"| Changed Files | {pr.changed_files} |")
    if pr.additions is not None:
        lines.append(f"| Additions | {pr.additions} |")
    if pr.deletions is not None:
        lines.append(f"| Deletions | {pr.deletions} |")
    if pr.html_url:
        lines.append(f"| URL | {pr.html_url} |")
    lines.append("")
    if pr.body:
        lines.append(pr.body)
        lines.append("")
    return lines


def _comment_lines(comment: Comment) -> list[str]:
    author = comment.user.login if comment.user else "ghost"
    when = f" — {comment.created_at}" if comment.created_at else ""
    lines = [f"## Comment {comment.id} by @{author}{when}", ""]
    if comment.in_reply_to_id is not None:
        lines.append(f"In reply to {comment.in_reply_to_id}")
        lines.append("")
    if comment.path:
        position = f" **Position:** {comment.position}" if comment.position is not None else ""
        lines.append(f"**File:** `{comment.path}`{position}")
        lines.append("")
    if comment.diff_hunk:
        lines.append("```diff")
        lines.append(comment.diff_hunk)
        lines.append("```")
        lines.append("")
    if comment.html_url:
        lines.append(f"[View comment]({comment.html_url})")
        lines.append("")
    lines.append(comment.body)
    lines.append("")
    return lines


def _commit_lines(commit: Commit) -> list[str]:
    summary = (commit.message or "").splitlines()[0] if commit.message else ""
    author = commit.author_name or "unknown"
    return [f"- `{commit.sha[:7]}` {summary} ({author})"]


def _file_lines(entry: PullRequestFile) -> list[str]:
    status = f" [{entry.status}]" if entry.status else ""
    return [f"- `{entry.filename}`{status} +{entry.additions} -{entry.deletions}"]


def _merge_lines(result: MergeResult) -> list[str]:
    outcome = "merged" if result.merged else "not merged"
    lines = [f"- `{result.sha}` {outcome}"]
    if result.message:
        lines.append(f"  {result.message}")
    return lines
