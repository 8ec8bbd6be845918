from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from json_log_reader.core.config import JsonReaderConfig
from json_log_reader.core.log_service import get_events
from json_log_reader.core.models import TIMESTAMP_KEY


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("workers must be an integer") from e
    if value < 1:
        raise argparse.ArgumentTypeError("workers must be >= 1")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Decode JSON log lines into events (one JSON object per line).")
    p.add_argument("log_path")
    p.add_argument("--message-key", default="", help="Decoded field that becomes the event text")
    p.add_argument("--keys-under-root", action="store_true", help="Merge decoded fields at the top level")
    p.add_argument("--overwrite-keys", action="store_true", help="Let decoded fields replace existing ones")
    p.add_argument("--add-error-key", action="store_true", help="Add an error object when decoding fails")
    p.add_argument("--ignore-decoding-error", action="store_true", help="Do not log decoding failures")
    p.add_argument("--workers", type=_positive_int, default=None, help="Decode worker threads (default: CPU count)")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    path = Path(args.log_path)
    config = JsonReaderConfig(
        message_key=args.message_key,
        keys_under_root=args.keys_under_root,
        overwrite_keys=args.overwrite_keys,
        add_error_key=args.add_error_key,
        ignore_decoding_error=args.ignore_decoding_error,
    )

    try:
        events = asyncio.run(get_events(path, config=config, max_workers=args.workers))
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    for event in events:
        ts = event.timestamp.isoformat() if event.timestamp else None
        doc = {TIMESTAMP_KEY: ts, **event.fields}
        print(json.dumps(doc, default=str, ensure_ascii=False))


if __name__ == "__main__":
    main()
