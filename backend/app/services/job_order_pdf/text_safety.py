"""Text clamping and glyph filtering for PDF text.

The built-in PDF fonts only cover a small character set, so everything drawn
is reduced to printable ASCII first.
"""

import re
from typing import Any

ELLIPSIS = "..."

_UNPRINTABLE = re.compile(r"[^\x20-\x7E\n]")


def clamp(value: Any, max_length: int = 100) -> str:
    """Convert to text and cut to ``max_length`` characters plus an ellipsis."""
    if value is None:
        return ""
    text = str(value)
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def sanitize(text: str) -> str:
    """Drop every character outside printable ASCII, keeping newlines."""
    return _UNPRINTABLE.sub("", text)


def safe_text(value: Any, max_length: int = 100) -> str:
    """Clamp then sanitize; this is the exact string that gets measured and drawn."""
    return sanitize(clamp(value, max_length))
