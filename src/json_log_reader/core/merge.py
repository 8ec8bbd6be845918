"""Merging decoded JSON fields into an event."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .config import JsonReaderConfig
from .errors import make_json_error
from .models import ERROR_KEY, JSON_KEY, MESSAGE_KEY, TIMESTAMP_KEY, Event
from .timestamps import coerce_timestamp, parse_rfc3339

logger = logging.getLogger(__name__)

TYPE_KEY = "type"


def write_json_keys(event: Event, keys: Mapping[str, Any], overwrite_keys: bool) -> None:
    """Write decoded keys at the top level of event.fields.

    Existing keys are only replaced when overwrite_keys is set. ``@timestamp``
    goes to event.timestamp and must be an RFC3339 string; ``type`` must be a
    non-empty string not starting with an underscore when it overwrites.
    """
    for key, value in keys.items():
        if key == TIMESTAMP_KEY:
            if not overwrite_keys and event.timestamp is not None:
                continue
            if not isinstance(value, str):
                logger.error("JSON: Won't overwrite @timestamp because value is not string")
                event.fields[ERROR_KEY] = make_json_error("@timestamp not overwritten (not string)")
                continue
            ts = parse_rfc3339(value)
            if ts is None:
                logger.error("JSON: Won't overwrite @timestamp because of parsing error: %r", value)
                event.fields[ERROR_KEY] = make_json_error(
                    f"@timestamp not overwritten (parse error on {value})"
                )
                continue
            event.timestamp = ts
            continue

        if key in event.fields and not overwrite_keys:
            continue

        if key == TYPE_KEY and overwrite_keys:
            if not isinstance(value, str):
                logger.error("JSON: Won't overwrite type because value is not string")
                event.fields[ERROR_KEY] = make_json_error("type not overwritten (not string)")
                continue
            if not value or value.startswith("_"):
                logger.error(
                    "JSON: Won't overwrite type because value is empty or starts with an underscore"
                )
                event.fields[ERROR_KEY] = make_json_error(
                    f"type not overwritten (invalid value [{value}])"
                )
                continue

        event.fields[key] = value


def merge_json_fields(
    data: dict[str, Any],
    json_fields: dict[str, Any],
    text: str | None,
    config: JsonReaderConfig,
) -> datetime | None:
    """Merge json_fields into the event mapping data.

    Returns the event timestamp found while merging at root, or None.
    data and json_fields are modified in place.
    """
    # The message key might have been rewritten by multiline aggregation.
    if config.message_key and text is not None:
        json_fields[config.message_key] = text

    # Decoding failed and only the error annotation is left: keep the raw line.
    if len(json_fields) == 1 and json_fields.get(ERROR_KEY) is not None and text is not None:
        data[MESSAGE_KEY] = text

    if not config.keys_under_root:
        return None

    data.pop(JSON_KEY, None)

    ts: datetime | None = None
    if TIMESTAMP_KEY in data:
        ts = coerce_timestamp(data.pop(TIMESTAMP_KEY))

    event = Event(timestamp=ts, fields=data)
    write_json_keys(event, json_fields, config.overwrite_keys)
    return event.timestamp
