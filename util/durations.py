"""Duration expressions for deadlines ("10m", "1h2s", "1.5h") and compact formatting."""

import re
from typing import Dict

_UNIT_SECONDS: Dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT_RE = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

# Largest span a signed 64-bit nanosecond count can hold.
MAX_DURATION_SECONDS = 9223372036.854775807


def parse_duration(value: str) -> float:
    """Parse a duration expression into seconds.

    Raises ValueError for empty, malformed or out-of-range input.
    """
    text = (value or "").strip()
    if not text:
        raise ValueError("empty duration")
    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration: {value!r}")
    total = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT_RE.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration: {value!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if total > MAX_DURATION_SECONDS:
        raise ValueError(f"duration out of range: {value!r}")
    return sign * total


def short_duration(seconds: float) -> str:
    """Format remaining time as ``1h2m3s`` / ``4m5s`` / ``6s`` (rounded to the second)."""
    total = int(round(max(0.0, seconds)))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}h{minutes}m{secs}s"
    if minutes > 0:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


__all__ = ["MAX_DURATION_SECONDS", "parse_duration", "short_duration"]
