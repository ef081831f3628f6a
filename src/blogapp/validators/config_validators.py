"""Normalisers used by `field_validator(..., mode="before")` hooks."""


def to_uppercase(value):
    """`"debug"` -> `"DEBUG"`; None and non-strings pass through."""
    return value.upper() if isinstance(value, str) else value


def to_lowercase(value):
    return value.lower() if isinstance(value, str) else value


def strip_or_none(value):
    """Strip surrounding whitespace; a blank string becomes None."""
    if not isinstance(value, str):
        return value
    return value.strip() or None
