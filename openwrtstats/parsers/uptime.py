"""
Uptime extraction from router status text.

Three formats are recognised, tried in this order:

    1. A banner followed by /proc/uptime style output
           === uptime router1 ===
           350735.47 234388.90

    2. Bare /proc/uptime output at the start of the text
           350735.47 234388.90

    3. The uptime(1) / BusyBox summary
           12:01:33 up 4 days,  1:02:03,  load average: 0.00, 0.01, 0.05
           12:01:33 up  1:02,  load average: 0.00, 0.01, 0.05

Anything else yields None, which callers render as "N/A".
"""
import math
import re
from typing import Optional

from openwrtstats.parsers.cursor import LineCursor

UPTIME_HEADER_RE = re.compile(r"^===\s+uptime\s+\S+\s+===")
NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")
UP_SINCE_RE = re.compile(r"up\s+(?:(\d+)\s+days?,\s+)?(\d+):(\d+)(?::(\d+))?")


def _leading_seconds(line: str) -> Optional[int]:
    tokens = line.split()
    if tokens and NUMBER_RE.match(tokens[0]):
        return math.floor(float(tokens[0]))
    return None


def _seconds_after_header(text: str) -> Optional[int]:
    cursor = LineCursor(text)
    while not cursor.done():
        if UPTIME_HEADER_RE.match(cursor.current()):
            following = cursor.peek(1)
            if following:
                seconds = _leading_seconds(following[0])
                if seconds is not None:
                    return seconds
        cursor.advance()
    return None


def parse_uptime(text: str) -> Optional[int]:
    """Return the router uptime in whole seconds, or None if not found.

    Fractional seconds are floored. Never raises on malformed input and never
    returns a negative value.
    """
    text = (text or "").strip()
    if not text:
        return None

    seconds = _seconds_after_header(text)
    if seconds is not None:
        return seconds

    seconds = _leading_seconds(text)
    if seconds is not None:
        return seconds

    match = UP_SINCE_RE.search(text)
    if match:
        days = int(match.group(1) or 0)
        hours = int(match.group(2))
        minutes = int(match.group(3))
        secs = int(match.group(4) or 0)
        return days * 86400 + hours * 3600 + minutes * 60 + secs

    return None
