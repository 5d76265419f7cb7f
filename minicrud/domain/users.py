"""Domain helpers for user record validation and lookups."""
from __future__ import annotations

import math
import re
from typing import Any, Iterable

NAME_MAX_LENGTH = 60
EMAIL_MAX_LENGTH = 120
TRIM_CHARS = " \t\n\r\0\x0b"

EMAIL_PATTERN = re.compile(
    r"(?=[^@]{1,64}@)"  # local part: 64 chars max
    r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+"
    r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
)
NUMERIC_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def clean_text(value: Any) -> str:
    """Coerce a raw body value to a trimmed string ("" when missing).

    Only ASCII blanks and NUL are trimmed; NBSP and other Unicode spaces stay.
    """
    if value is None:
        return ""
    return str(value).strip(TRIM_CHARS)


def normalize_email(value: str | None) -> str:
    return (value or "").strip(TRIM_CHARS).lower()


def is_valid_email(value: str | None) -> bool:
    """Return True when value looks like a deliverable address (local@domain.tld)."""
    if not value:
        return False
    return bool(EMAIL_PATTERN.fullmatch(value))


def email_in_use(records: Iterable[Any], normalized: str) -> bool:
    """Exact match against stored emails; entries without a string email are skipped."""
    for record in records:
        if isinstance(record, dict) and isinstance(record.get("email"), str) and record["email"] == normalized:
            return True
    return False


def parse_index(value: Any) -> int | None:
    """
    Convert a raw position to int.

    Accepts ints, integral floats (2.0) and strings holding such a number.
    Returns None for booleans, fractions, negatives, NaN/inf and anything else.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        text = value.strip(TRIM_CHARS)
        if not NUMERIC_PATTERN.fullmatch(text):
            return None
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    return value
