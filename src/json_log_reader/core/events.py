"""Building events from decoded messages."""

from __future__ import annotations

from .config import JsonReaderConfig
from .merge import merge_json_fields
from .models import JSON_KEY, MESSAGE_KEY, Event, Message


def build_event(message: Message, config: JsonReaderConfig | None) -> Event:
    """Turn a (possibly JSON-decoded) message into an Event.

    Decoded fields are merged per config; otherwise the line text becomes
    the ``message`` field.
    """
    text = message.content.decode("utf-8", errors="replace")
    fields = dict(message.fields)
    json_fields = fields.get(JSON_KEY)

    if config is not None and isinstance(json_fields, dict) and json_fields:
        ts = merge_json_fields(fields, json_fields, text, config)
        return Event(timestamp=ts or message.ts, fields=fields)

    fields[MESSAGE_KEY] = text
    return Event(timestamp=message.ts, fields=fields)
