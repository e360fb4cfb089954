"""Text sanitization rules for shopper-supplied strings.

Identifiers (product and fabric slugs) get a strict allow-list; free-text
notes only lose their markup. Both helpers return ``None`` when the input
cannot be made acceptable, and the caller decides what that means.
"""

from __future__ import annotations

import re
from typing import Any

MAX_IDENTIFIER_LENGTH = 50
MAX_NOTES_LENGTH = 500

_TAG_RE = re.compile(r"<[^>]*>")
_IDENTIFIER_RE = re.compile(r"^[a-zA-Z0-9\-_åäöÅÄÖ]+$")


def strip_markup(text: str) -> str:
    return _TAG_RE.sub("", text).strip()


def sanitize_identifier(value: Any, max_length: int = MAX_IDENTIFIER_LENGTH) -> str | None:
    """Return a clean slug, or None if *value* is not an acceptable identifier."""
    if not isinstance(value, str):
        return None
    cleaned = strip_markup(value)
    if not cleaned or len(cleaned) > max_length:
        return None
    if not _IDENTIFIER_RE.match(cleaned):
        return None
    return cleaned


def sanitize_notes(value: Any, max_length: int = MAX_NOTES_LENGTH) -> str | None:
    """Strip markup from free text.

    Raises ValueError when the text is not a string or is too long. Blank
    notes come back as None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("notes must be a string")
    cleaned = strip_markup(value)
    if len(cleaned) > max_length:
        raise ValueError(f"notes exceed {max_length} characters")
    return cleaned or None
