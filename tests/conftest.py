from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from json_log_reader.core.config import JsonReaderConfig


@pytest.fixture
def write_json_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    '{"@timestamp":"2025-12-30T08:12:01Z","level":"info","msg":"service started","id":1}',
                    '{"@timestamp":"2025-12-30T08:12:03Z","level":"warning","msg":"retrying","attempt":2.5}',
                    "not json at all",
                    '{"@timestamp":"2025-12-30T08:12:05Z","level":"error","msg":"database unavailable"}',
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, list[bytes]], None]:
    def _write(path: Path, lines: list[bytes]) -> None:
        path.write_bytes(b"".join(line + b"\n" for line in lines))

    return _write


@pytest.fixture(autouse=True)
def _clear_json_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "JSON_LOG_MESSAGE_KEY",
        "JSON_LOG_KEYS_UNDER_ROOT",
        "JSON_LOG_OVERWRITE_KEYS",
        "JSON_LOG_ADD_ERROR_KEY",
        "JSON_LOG_IGNORE_DECODING_ERROR",
        "JSON_LOG_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def root_config() -> JsonReaderConfig:
    return JsonReaderConfig(message_key="msg", keys_under_root=True, add_error_key=True)
