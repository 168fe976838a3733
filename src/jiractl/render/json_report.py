"""JSON renderer for views and command results."""

from __future__ import annotations

import dataclasses
import json
import os
from collections.abc import Mapping
from typing import Any

PRETTY_ENV = "JIRACTL_JSON_PRETTY"

# Keys dropped from the payload when their value is empty.
_OMIT_WHEN_EMPTY = frozenset({"matched_by", "warning", "comments"})


def render_json(view: object, env: Mapping[str, str] | None = None) -> str:
    """Render a view dataclass (or plain mapping) as one JSON document.

    Output is compact unless ``JIRACTL_JSON_PRETTY=1``.
    """
    env = os.environ if env is None else env
    payload = _to_payload(view)
    if env.get(PRETTY_ENV, "").strip() == "1":
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False) + "\n"


def _to_payload(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _to_payload(getattr(value, field.name))
            for field in dataclasses.fields(value)
            if not (field.name in _OMIT_WHEN_EMPTY and not getattr(value, field.name))
        }
    if isinstance(value, Mapping):
        return {str(key): _to_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_payload(item) for item in value]
    return value
