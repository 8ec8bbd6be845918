"""MCP server entrypoint (stdio transport).

Exposes the JSON log decoder as a tool.

Run locally (stdio):
    python -m json_log_reader.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from json_log_reader.tools.decode import decode_json_logs_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("JSON_LOG_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("json-log-reader", json_response=True)


@mcp.tool()
async def decode_json_logs(
    log_path: str,
    message_key: str | None = None,
    keys_under_root: bool = False,
    overwrite_keys: bool = False,
    add_error_key: bool = False,
    ignore_decoding_error: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Decode a JSON-lines log file into structured events.

    Parameters
    ----------
    log_path:
        Path to a local log file. Supports plain text and .gz.
    message_key:
        Decoded field whose string value becomes the event text.
    keys_under_root:
        Place decoded fields at the top level instead of under "json".
    overwrite_keys:
        With keys_under_root, let decoded fields replace existing ones
        (including @timestamp).
    add_error_key:
        Annotate events with an "error" object when decoding fails.
    ignore_decoding_error:
        Do not log decoding failures.
    limit:
        Maximum number of events returned (hard-capped in the implementation).

    Returns
    -------
    dict:
        {"count": int, "events": list[dict]}
    """
    return await decode_json_logs_impl(
        log_path=log_path,
        message_key=message_key,
        keys_under_root=keys_under_root,
        overwrite_keys=overwrite_keys,
        add_error_key=add_error_key,
        ignore_decoding_error=ignore_decoding_error,
        limit=limit,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
