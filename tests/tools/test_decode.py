from __future__ import annotations

from pathlib import Path

import pytest

from json_log_reader.tools.decode import decode_json_logs_impl


@pytest.mark.asyncio
async def test_decode_json_logs_impl_under_root(tmp_path: Path, write_json_log) -> None:
    log = tmp_path / "app.log"
    write_json_log(log)

    out = await decode_json_logs_impl(
        log_path=str(log),
        message_key="msg",
        keys_under_root=True,
        overwrite_keys=True,
        add_error_key=True,
        ignore_decoding_error=True,
    )

    assert out["count"] == 4
    first = out["events"][0]
    assert first["timestamp"] == "2025-12-30T08:12:01+00:00"
    assert first["fields"] == {"level": "info", "msg": "service started", "id": 1}
    assert out["events"][2]["fields"]["msg"] == "not json at all"
    assert out["events"][2]["fields"]["error"]["type"] == "json"


@pytest.mark.asyncio
async def test_decode_json_logs_impl_limit(tmp_path: Path, write_json_log) -> None:
    log = tmp_path / "app.log"
    write_json_log(log)

    out = await decode_json_logs_impl(log_path=str(log), limit=2, ignore_decoding_error=True)

    assert out["count"] == 2
    assert len(out["events"]) == 2
    assert "json" in out["events"][0]["fields"]


@pytest.mark.asyncio
async def test_decode_json_logs_impl_invalid_limit(tmp_path: Path, write_json_log) -> None:
    log = tmp_path / "app.log"
    write_json_log(log)

    with pytest.raises(ValueError, match="limit"):
        await decode_json_logs_impl(log_path=str(log), limit=0)


@pytest.mark.asyncio
async def test_decode_json_logs_impl_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await decode_json_logs_impl(log_path=str(tmp_path / "nope.log"))
