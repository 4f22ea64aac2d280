"""Data models for calendar navigation.

Contains Pydantic models for the navigation target, the state read back from
the widget on each iteration, and the result of a date selection.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .months import month_name


class NavigationState(str, Enum):
    """Navigation loop states."""

    SEEKING = "seeking"
    MATCHED = "matched"
    EXHAUSTED = "exhausted"


class CalendarTarget(BaseModel):
    """The date to select, as the widget renders it.

    Attributes:
        year: Four digit year text (e.g. "2026")
        month: Full English month name (e.g. "February")
        day: Day-of-month text without padding (e.g. "4")
    """

    model_config = ConfigDict(frozen=True)

    year: str = Field(..., min_length=1, description="Target year text")
    month: str = Field(..., description="Target month name")
    day: str = Field(..., min_length=1, description="Target day text")

    @field_validator("year", "day", mode="before")
    @classmethod
    def coerce_to_text(cls, v):
        """Accept ints for year/day and store their text form."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def from_date(cls, target_date: date) -> "CalendarTarget":
        """Build a target from a date object."""
        return cls(
            year=str(target_date.year),
            month=month_name(target_date.month - 1),
            day=str(target_date.day),
        )

    def __str__(self) -> str:
        return f"{self.month} {self.day}, {self.year}"


class CalendarState(BaseModel):
    """Month/year currently rendered by the widget header."""

    model_config = ConfigDict(frozen=True)

    displayed_year: str = ""
    displayed_month: str = ""

    def matches(self, target: CalendarTarget) -> bool:
        """Exact text comparison against the target month/year."""
        return (
            self.displayed_year == target.year
            and self.displayed_month == target.month
        )


class DateSelectionResult(BaseModel):
    """Outcome of a successful navigation.

    Attributes:
        target: The requested date
        navigations: Number of prev/next clicks issued
        day_selected: Whether a day cell matched and was clicked
        state: Terminal navigation state
    """

    target: CalendarTarget
    navigations: int = Field(ge=0)
    day_selected: bool
    state: NavigationState = NavigationState.MATCHED
