"""Shared fixtures: an in-memory calendar widget that behaves like jQuery UI."""

import calendar
from typing import Optional

import pytest

from src.navigator.config import WidgetSelectors
from src.navigator.months import MONTH_NAMES


class FakeDayCell:
    """Day cell that records clicks on its owning widget."""

    def __init__(self, widget: "SimulatedCalendarWidget", text: str):
        self.widget = widget
        self.text = text

    async def inner_text(self) -> str:
        return self.text

    async def click(self) -> None:
        self.widget.clicked_days.append(self.text.strip())


class SimulatedCalendarWidget:
    """
    Month-paged calendar held in memory.

    Next/prev clicks move the displayed month by one. ``frozen`` keeps the
    header unchanged whatever is clicked.
    """

    def __init__(
        self,
        year: int,
        month: str,
        frozen: bool = False,
        day_texts: Optional[list[str]] = None,
    ):
        self.selectors = WidgetSelectors()
        self.year = year
        self.month = MONTH_NAMES.index(month)
        self.frozen = frozen
        self.day_texts = day_texts
        self.commands: list[str] = []
        self.waits: list[int] = []
        self.clicked_days: list[str] = []
        self.enumerations = 0

    @property
    def displayed(self) -> tuple[str, str]:
        return str(self.year), MONTH_NAMES[self.month]

    async def read_text(self, selector: str) -> str:
        if selector == self.selectors.year:
            return str(self.year)
        if selector == self.selectors.month:
            return MONTH_NAMES[self.month]
        raise AssertionError(f"Unexpected read selector: {selector}")

    async def click(self, selector: str) -> None:
        if selector == self.selectors.next_button:
            self.commands.append("next")
            step = 1
        elif selector == self.selectors.prev_button:
            self.commands.append("prev")
            step = -1
        else:
            raise AssertionError(f"Unexpected click selector: {selector}")

        if not self.frozen:
            total = self.year * 12 + self.month + step
            self.year, self.month = divmod(total, 12)

    async def enumerate(self, selector: str) -> list[FakeDayCell]:
        assert selector == self.selectors.day_cells
        self.enumerations += 1
        if self.day_texts is not None:
            texts = self.day_texts
        else:
            # Leading blanks pad the first week like the jQuery UI grid
            first_weekday, days = calendar.monthrange(self.year, self.month + 1)
            texts = [" "] * first_weekday + [str(d) for d in range(1, days + 1)]
        return [FakeDayCell(self, text) for text in texts]

    async def wait(self, duration_ms: int) -> None:
        self.waits.append(duration_ms)


@pytest.fixture
def make_widget():
    """Factory for simulated calendar widgets."""

    def _make(year: int, month: str, **kwargs) -> SimulatedCalendarWidget:
        return SimulatedCalendarWidget(year, month, **kwargs)

    return _make
