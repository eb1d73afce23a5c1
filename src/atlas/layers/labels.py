"""Human-readable labels for snake_case category tokens."""

from __future__ import annotations

import re

_WORD_START = re.compile(r"(^|\s)(\S)")


def format_label(token: str) -> str:
    """Turn ``primary_attraction`` into ``Primary Attraction``.

    Underscores become spaces, then the first character of every
    whitespace-delimited word is upper-cased.  The rest of each word keeps
    its casing.
    """
    spaced = token.replace("_", " ")
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), spaced)


def truncate_label(text: str, limit: int = 12) -> str:
    """Clip ``text`` to ``limit`` characters, appending ``...`` when clipped."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
