"""Structured error values attached to decoded fields."""

from __future__ import annotations

from typing import Any

JSON_ERROR_TYPE = "json"


def make_json_error(message: str) -> dict[str, Any]:
    """Return the structured error stored under the ``error`` key."""
    return {"message": message, "type": JSON_ERROR_TYPE}
