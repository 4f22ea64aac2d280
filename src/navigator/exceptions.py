"""Exceptions raised while driving calendar widgets."""


class CalendarInteractionError(Exception):
    """Base exception for calendar interaction failures."""

    pass


class NavigationExhaustedError(CalendarInteractionError):
    """The navigation budget ran out before the target month/year was shown."""

    def __init__(self, month: str, year: str, budget: int):
        self.month = month
        self.year = year
        self.budget = budget
        super().__init__(
            f"Could not navigate to {month} {year} after {budget} attempts"
        )


class DayNotFoundError(CalendarInteractionError):
    """No day cell matched the target day after reaching the target month."""

    def __init__(self, day: str, month: str, year: str):
        self.day = day
        self.month = month
        self.year = year
        super().__init__(f"Day {day} not found in calendar for {month} {year}")
