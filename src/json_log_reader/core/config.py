"""JSON reader configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

ENV_PREFIX = "JSON_LOG_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class JsonReaderConfig:
    """Options controlling JSON decoding and placement of decoded fields.

    Instances are immutable and may be shared between threads.
    """

    # Decoded field whose string value replaces the line text ("" disables).
    message_key: str = ""
    # Only silences the decode-failure log line; results are unchanged.
    ignore_decoding_error: bool = False
    add_error_key: bool = False
    keys_under_root: bool = False
    overwrite_keys: bool = False

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> JsonReaderConfig:
        """Build a config from snake_case option names (e.g. a parsed YAML block)."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(raw) - set(known))
        if unknown:
            raise ValueError(f"Unknown JSON reader option(s): {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for name, value in raw.items():
            expected = str if name == "message_key" else bool
            if value is None:
                continue
            if type(value) is not expected:
                raise ValueError(f"{name} must be a {expected.__name__}")
            values[name] = value
        return cls(**values)


def _parse_bool(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (true/false)")


def resolve_json_config(cfg: JsonReaderConfig | None) -> JsonReaderConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = JsonReaderConfig()

    changes: dict[str, Any] = {}
    for f in fields(cfg):
        env_name = ENV_PREFIX + f.name.upper()
        env = os.getenv(env_name)
        if env is None or env == "":
            continue
        value: Any = env if f.name == "message_key" else _parse_bool(env_name, env)
        if value != getattr(cfg, f.name):
            changes[f.name] = value

    if not changes:
        return cfg
    return replace(cfg, **changes)
