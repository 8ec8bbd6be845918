from __future__ import annotations

import json
from pathlib import Path

import pytest

from json_log_reader.cli import main


def test_cli_prints_one_event_per_line(
    tmp_path: Path, write_json_log, capsys: pytest.CaptureFixture[str]
) -> None:
    log = tmp_path / "app.log"
    write_json_log(log)

    main(
        [
            str(log),
            "--message-key",
            "msg",
            "--keys-under-root",
            "--overwrite-keys",
            "--ignore-decoding-error",
            "--workers",
            "1",
        ]
    )

    lines = capsys.readouterr().out.splitlines()
    docs = [json.loads(line) for line in lines]
    assert len(docs) == 4
    assert docs[0] == {
        "@timestamp": "2025-12-30T08:12:01+00:00",
        "level": "info",
        "msg": "service started",
        "id": 1,
    }
    assert docs[2]["message"] == "not json at all"


def test_cli_missing_file_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.log")])
    assert exc.value.code == 2
    assert "not found" in capsys.readouterr().err
