"""Shared utilities used across the chat engine."""

from typing import Any, Iterable


def normalize_input(value: str) -> str:
    """Lowercase and trim raw user input.

    Examples:
        >>> normalize_input("  How Much for a HAIRCUT?  ")
        'how much for a haircut?'
    """
    return value.strip().lower()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs as a substring of ``text``."""
    return any(keyword in text for keyword in keywords)


def coerce_day_index(value: Any) -> int:
    """Coerce a day-of-week value that may arrive as text to an int.

    Raises ValueError for anything that is not a whole number.

    Examples:
        >>> coerce_day_index(" 3 ")
        3
        >>> coerce_day_index(0)
        0
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid day index: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValueError(f"Invalid day index: {value!r}") from None
