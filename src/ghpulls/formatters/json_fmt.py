from __future__ import annotations

import dataclasses
import json
from collections.abc import Sequence
from typing import Any


def format_json(records: Sequence[Any]) -> str:
    return json.dumps([dataclasses.asdict(record) for record in records], indent=2)
