"""Month name resolution for calendar header comparison."""

from typing import Optional

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Ordinal an unresolved month takes in chronological comparisons
NOT_FOUND_ORDINAL = -1


def month_index(month_name: str) -> Optional[int]:
    """
    Resolve a month name to its zero-based ordinal.

    Matching is exact and case-sensitive: "January" is 0, "December" is 11.
    Abbreviations, other casings and localized names are not recognised.

    Args:
        month_name: Full English month name

    Returns:
        Ordinal 0-11, or None if the name is not one of the twelve months
    """
    try:
        return MONTH_NAMES.index(month_name)
    except ValueError:
        return None


def comparable_month_index(month_name: str) -> int:
    """Return the ordinal used for ordering, NOT_FOUND_ORDINAL if unresolved."""
    index = month_index(month_name)
    return NOT_FOUND_ORDINAL if index is None else index


def month_name(index: int) -> str:
    """Return the month name for a zero-based ordinal."""
    if not 0 <= index < len(MONTH_NAMES):
        raise ValueError(f"Month ordinal must be between 0 and 11, got: {index}")
    return MONTH_NAMES[index]
