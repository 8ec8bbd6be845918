"""JSON decoding of raw log lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .config import JsonReaderConfig
from .errors import make_json_error
from .models import ERROR_KEY, JSON_KEY, Message
from .numbers import loads
from .readers import Reader

logger = logging.getLogger(__name__)


def unmarshal(text: bytes) -> dict[str, Any]:
    """Decode text into a dict of JSON fields with ints kept as ints.

    Raises ValueError when text is not a JSON object.
    """
    value = loads(text.decode("utf-8", errors="replace"))
    if not isinstance(value, dict):
        raise ValueError(f"top-level JSON value is {type(value).__name__}, not an object")
    return value


@dataclass(frozen=True, slots=True)
class JsonDecoder:
    """Turn raw line bytes into (leftover text, decoded fields)."""

    config: JsonReaderConfig

    def decode(self, text: bytes) -> tuple[bytes, dict[str, Any] | None]:
        """Decode text and return the new line content plus the JSON fields.

        On failure the original bytes come back untouched. The fields are None,
        or ``{"error": {...}}`` when add_error_key is set.
        """
        cfg = self.config
        try:
            json_fields = unmarshal(text)
        except (ValueError, RecursionError) as exc:
            if not cfg.ignore_decoding_error:
                logger.error("Error decoding JSON: %s", exc)
            if cfg.add_error_key:
                return text, {ERROR_KEY: make_json_error(f"Error decoding JSON: {exc}")}
            return text, None

        key = cfg.message_key
        if not key:
            return b"", json_fields

        if key not in json_fields:
            if cfg.add_error_key:
                json_fields[ERROR_KEY] = make_json_error(f"Key '{key}' not found")
            return b"", json_fields

        value = json_fields[key]
        if not isinstance(value, str):
            if cfg.add_error_key:
                json_fields[ERROR_KEY] = make_json_error(f"Value of key '{key}' is not a string")
            return b"", json_fields

        return value.encode("utf-8"), json_fields

    def apply(self, message: Message) -> Message:
        """Decode message content in place and attach the fields under ``json``."""
        message.content, json_fields = self.decode(message.content)
        message.add_fields({JSON_KEY: json_fields})
        return message


class JsonReader:
    """Reader wrapper decoding every line it hands out."""

    def __init__(self, reader: Reader, config: JsonReaderConfig) -> None:
        self._reader = reader
        self._decoder = JsonDecoder(config)

    def next(self) -> Message:
        """Read the next message and decode it; reader errors propagate."""
        return self._decoder.apply(self._reader.next())
