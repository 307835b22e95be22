"""Human readable formatting for uptimes and byte counters."""
from typing import Optional, Union

from openwrtstats.models import UNAVAILABLE

BYTE_UNITS = ['Bytes', 'KB', 'MB', 'GB', 'TB']


def format_uptime(seconds: Optional[Union[int, str]]) -> str:
    """Format seconds as "45s", "3m 5s", "2h 10m" or "4d 1h 2m".

    Values that are not numbers (e.g. "N/A") are returned as "N/A".
    """
    try:
        total = int(seconds)
    except (TypeError, ValueError):
        return UNAVAILABLE
    if total < 60:
        return f"{total}s"
    minutes, secs = divmod(total, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {minutes}m"
    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h {minutes}m"


def format_bytes(n: Optional[Union[int, str]]) -> str:
    """Format a byte count as "0 Bytes", "512 Bytes", "1.5 KB", ..."""
    try:
        n = int(n)
    except (TypeError, ValueError):
        return UNAVAILABLE
    if n <= 0:
        return "0 Bytes"
    value = float(n)
    for unit in BYTE_UNITS:
        if value < 1024 or unit == BYTE_UNITS[-1]:
            break
        value /= 1024
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"
