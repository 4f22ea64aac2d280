"""
Navigation direction policy for paginated calendar widgets.

Decides whether the next click on a month/year calendar should go to the
next or the previous month.
"""

import re
from enum import Enum
from typing import Optional

from .months import comparable_month_index

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class NavigationPolicy(str, Enum):
    """Caller-selected navigation strategy."""

    FORWARD = "future"
    BACKWARD = "past"
    AUTO = "auto"


class Direction(str, Enum):
    """A single navigation move."""

    FORWARD = "forward"
    BACKWARD = "backward"


def parse_year(year_text: Optional[str]) -> int:
    """
    Parse a rendered year, tolerating missing or noisy text.

    Leading digits are used ("2026 " -> 2026); anything unparseable is 0.
    """
    if not year_text:
        return 0
    match = _LEADING_INT.match(year_text)
    return int(match.group(1)) if match else 0


def decide_direction(
    current_year: Optional[str],
    current_month: Optional[str],
    target_year: str,
    target_month: str,
    policy: NavigationPolicy = NavigationPolicy.AUTO,
) -> Direction:
    """
    Choose the next navigation move.

    FORWARD and BACKWARD policies are unconditional. AUTO compares
    (year, month ordinal) pairs and moves forward only when the displayed
    month is strictly earlier than the target. Everything else, including
    being on the target already or an unresolved displayed month, moves
    backward.

    Args:
        current_year: Year text displayed by the widget
        current_month: Month text displayed by the widget
        target_year: Year to reach
        target_month: Month name to reach
        policy: Navigation policy

    Returns:
        Direction of the next move
    """
    policy = NavigationPolicy(policy)

    if policy is NavigationPolicy.FORWARD:
        return Direction.FORWARD
    if policy is NavigationPolicy.BACKWARD:
        return Direction.BACKWARD

    current = (parse_year(current_year), comparable_month_index(current_month or ""))
    target = (parse_year(target_year), comparable_month_index(target_month))

    if current < target:
        return Direction.FORWARD
    return Direction.BACKWARD
