"""Module entrypoint.

Allows:
    python -m json_log_reader
"""

from __future__ import annotations

from json_log_reader.server.log_server import main

if __name__ == "__main__":
    main()
