from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .json_fmt import format_json
from .markdown_fmt import format_markdown


def get_formatter(fmt: str, **kwargs: Any) -> Callable[[Sequence[Any]], str]:
    if fmt == "json":
        return format_json
    if fmt == "markdown":
        owner_repo = kwargs.get("owner_repo", "")
        heading = kwargs.get("heading", "Pull Requests")
        return lambda records: format_markdown(records, owner_repo=owner_repo, heading=heading)
    raise ValueError(f"Unknown format: {fmt!r}")
