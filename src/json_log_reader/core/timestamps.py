"""Timestamp helpers."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone

# YYYY-MM-DDTHH:MM:SS[.frac](Z|+HH:MM|-HH:MM)
_RFC3339_RE = re.compile(
    r"(?P<y>\d{4})-(?P<mo>\d{2})-(?P<d>\d{2})T"
    r"(?P<h>\d{2}):(?P<mi>\d{2}):(?P<s>\d{2})(?:\.(?P<frac>\d+))?"
    r"(?:(?P<z>Z)|(?P<sign>[+-])(?P<oh>\d{2}):(?P<om>\d{2}))",
    re.ASCII,
)


def parse_rfc3339(value: str) -> datetime | None:
    """Parse an RFC3339 timestamp (offset required) into a UTC datetime."""
    m = _RFC3339_RE.fullmatch(value)
    if not m:
        return None

    if m.group("z"):
        tz = UTC
    else:
        oh, om = int(m.group("oh")), int(m.group("om"))
        if oh > 23 or om > 59:
            return None
        offset = timedelta(hours=oh, minutes=om)
        tz = timezone(-offset if m.group("sign") == "-" else offset)

    # Sub-microsecond digits are dropped.
    micro = int((m.group("frac") or "0")[:6].ljust(6, "0"))
    try:
        ts = datetime(
            int(m.group("y")),
            int(m.group("mo")),
            int(m.group("d")),
            int(m.group("h")),
            int(m.group("mi")),
            int(m.group("s")),
            micro,
            tzinfo=tz,
        )
    except ValueError:
        return None
    return ts.astimezone(UTC)


def coerce_timestamp(value: object) -> datetime | None:
    """Accept a datetime or an RFC3339 string; anything else gives None."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_rfc3339(value)
    return None
