"""Core data models for JSON log reading."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

TIMESTAMP_KEY = "@timestamp"
JSON_KEY = "json"
MESSAGE_KEY = "message"
ERROR_KEY = "error"


def deep_update(dst: dict[str, Any], src: Mapping[str, Any]) -> None:
    """Recursively merge src into dst; nested dicts are merged, other values replaced."""
    for key, value in src.items():
        current = dst.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            deep_update(current, value)
        else:
            dst[key] = value


@dataclass(slots=True)
class Message:
    """One record handed out by a reader (content + attached fields)."""

    ts: datetime
    content: bytes
    size: int = 0  # raw size read from the source, including the line terminator
    fields: dict[str, Any] = field(default_factory=dict)

    def add_fields(self, fields: Mapping[str, Any]) -> None:
        """Deep-merge fields into the message's attached fields."""
        deep_update(self.fields, fields)


@dataclass(slots=True)
class Event:
    """Event under construction: timestamp plus top-level fields."""

    timestamp: datetime | None  # None is the zero value (no timestamp decided yet)
    fields: dict[str, Any] = field(default_factory=dict)
