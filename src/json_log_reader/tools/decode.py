"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from contextlib import aclosing
from typing import Any

from pydantic import BaseModel, Field

from json_log_reader.core.config import JsonReaderConfig
from json_log_reader.core.log_service import iter_events
from json_log_reader.core.models import Event

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


class DecodedEvent(BaseModel):
    timestamp: str | None = Field(default=None, description="ISO-8601 event timestamp.")
    fields: dict[str, Any] = Field(default_factory=dict, description="Event fields after decoding.")


class DecodeResponse(BaseModel):
    count: int = Field(ge=0)
    events: list[DecodedEvent] = Field(default_factory=list)


def _event_to_model(event: Event) -> DecodedEvent:
    ts = event.timestamp.isoformat() if event.timestamp is not None else None
    return DecodedEvent(timestamp=ts, fields=event.fields)


async def decode_json_logs_impl(
    *,
    log_path: str,
    message_key: str | None = None,
    keys_under_root: bool = False,
    overwrite_keys: bool = False,
    add_error_key: bool = False,
    ignore_decoding_error: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `decode_json_logs` MCP tool.

    Notes
    -----
    - limit defaults to DEFAULT_LIMIT and is capped at HARD_LIMIT
    - reading stops as soon as limit events were produced
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    config = JsonReaderConfig(
        message_key=message_key or "",
        keys_under_root=keys_under_root,
        overwrite_keys=overwrite_keys,
        add_error_key=add_error_key,
        ignore_decoding_error=ignore_decoding_error,
    )

    events: list[DecodedEvent] = []
    # Single worker keeps the early stop cheap.
    async with aclosing(iter_events(log_path, config=config, max_workers=1)) as stream:
        async for event in stream:
            events.append(_event_to_model(event))
            if len(events) >= limit:
                break

    return DecodeResponse(count=len(events), events=events).model_dump()
