"""
Calendar navigation and date selection.

Drives a paginated month/year calendar widget to a target month, one
prev/next click at a time, then clicks the matching day cell. The displayed
month and year are re-read from the widget on every iteration and the number
of clicks is bounded by a navigation budget.
"""

from datetime import date
from typing import Optional, Union

from ..utils.logger import get_logger, navigator_logger
from ..utils.metrics import get_metrics
from .config import NavigatorConfig
from .direction import Direction, NavigationPolicy, decide_direction
from .exceptions import DayNotFoundError, NavigationExhaustedError
from .models import (
    CalendarState,
    CalendarTarget,
    DateSelectionResult,
    NavigationState,
)
from .widget import CalendarWidget

logger = get_logger()

# Pause between the two picks of a date range
RANGE_PAUSE_MS = 500


class CalendarNavigator:
    """
    Selects dates on calendar widgets.

    Holds only configuration; the widget handle is passed to every call and
    no state survives between calls.
    """

    def __init__(self, config: Optional[NavigatorConfig] = None):
        self.config = config or NavigatorConfig()
        self.metrics = get_metrics()

    async def read_state(self, widget: CalendarWidget) -> CalendarState:
        """Read the month/year currently displayed by the widget."""
        year_text = await widget.read_text(widget.selectors.year)
        month_text = await widget.read_text(widget.selectors.month)
        return CalendarState(displayed_year=year_text, displayed_month=month_text)

    async def navigate_to_month_year(
        self,
        widget: CalendarWidget,
        target: CalendarTarget,
        policy: NavigationPolicy = NavigationPolicy.AUTO,
    ) -> int:
        """
        Navigate the widget until it displays the target month and year.

        Args:
            widget: Calendar widget handle
            target: Date whose month/year should be displayed
            policy: Navigation direction policy

        Returns:
            Number of navigation clicks issued

        Raises:
            NavigationExhaustedError: If the budget runs out first
        """
        budget = self.config.max_navigations
        navigations = 0
        state = NavigationState.SEEKING

        while navigations < budget:
            current = await self.read_state(widget)

            if current.matches(target):
                state = NavigationState.MATCHED
                break

            direction = decide_direction(
                current.displayed_year,
                current.displayed_month,
                target.year,
                target.month,
                policy,
            )

            if direction is Direction.FORWARD:
                await widget.click(widget.selectors.next_button)
            else:
                await widget.click(widget.selectors.prev_button)

            navigations += 1
            self.metrics.record_navigation(direction.value)
            logger.debug(
                "Calendar navigation step",
                extra={
                    "displayed_month": current.displayed_month,
                    "displayed_year": current.displayed_year,
                    "direction": direction.value,
                    "navigations": navigations,
                },
            )

            await widget.wait(self.config.step_delay_ms)

        if state is not NavigationState.MATCHED:
            state = NavigationState.EXHAUSTED
            logger.error(
                "Navigation budget exhausted",
                extra={
                    "target_month": target.month,
                    "target_year": target.year,
                    "max_navigations": budget,
                    "state": state.value,
                },
            )
            self.metrics.record_navigation_error("navigation_exhausted")
            raise NavigationExhaustedError(target.month, target.year, budget)

        logger.info(
            "Navigated to target month/year",
            extra={
                "month": target.month,
                "year": target.year,
                "navigations": navigations,
            },
        )
        return navigations

    async def select_day(self, widget: CalendarWidget, day: str) -> bool:
        """
        Click the first day cell whose visible text equals ``day``.

        Args:
            widget: Calendar widget handle
            day: Day text to look for (e.g. "4")

        Returns:
            True if a cell was clicked, False if none matched
        """
        cells = await widget.enumerate(widget.selectors.day_cells)

        for cell in cells:
            text = await cell.inner_text()
            if text.strip() == day:
                await cell.click()
                logger.info("Selected day cell", extra={"day": day})
                return True

        logger.warning(
            "No day cell matched target day",
            extra={"day": day, "cells_checked": len(cells)},
        )
        return False

    async def select_date(
        self,
        widget: CalendarWidget,
        year: Union[str, int],
        month: str,
        day: Union[str, int],
        policy: Union[NavigationPolicy, str] = NavigationPolicy.AUTO,
    ) -> DateSelectionResult:
        """
        Navigate to a month/year and click the target day.

        Args:
            widget: Calendar widget handle, open and showing its grid
            year: Target year (e.g. "2026")
            month: Target month name (e.g. "February")
            day: Target day (e.g. "4")
            policy: "future", "past" or "auto"

        Returns:
            DateSelectionResult describing the selection

        Raises:
            NavigationExhaustedError: If the target month/year was not reached
            DayNotFoundError: If strict_day is set and no cell matched
        """
        target = CalendarTarget(year=year, month=month, day=day)
        return await self.select_target(widget, target, policy)

    async def select_target(
        self,
        widget: CalendarWidget,
        target: CalendarTarget,
        policy: Union[NavigationPolicy, str] = NavigationPolicy.AUTO,
    ) -> DateSelectionResult:
        """Select ``target`` on the widget; see ``select_date``."""
        policy = NavigationPolicy(policy)
        navigator_logger.log_selection_start(target.model_dump(), policy.value)

        with self.metrics.time_operation("select_date"):
            try:
                navigations = await self.navigate_to_month_year(
                    widget, target, policy
                )
            except NavigationExhaustedError:
                self.metrics.record_date_selection("exhausted")
                raise

            day_selected = await self.select_day(widget, target.day)

        if not day_selected:
            self.metrics.record_date_selection("day_not_found")
            if self.config.strict_day:
                raise DayNotFoundError(target.day, target.month, target.year)
        else:
            self.metrics.record_date_selection("selected")

        result = DateSelectionResult(
            target=target,
            navigations=navigations,
            day_selected=day_selected,
            state=NavigationState.MATCHED,
        )
        navigator_logger.log_selection_complete(result.model_dump(mode="json"))
        return result

    async def select_date_range(
        self,
        widget: CalendarWidget,
        start: Union[CalendarTarget, date],
        end: Union[CalendarTarget, date],
        policy: Union[NavigationPolicy, str] = NavigationPolicy.AUTO,
    ) -> tuple[DateSelectionResult, DateSelectionResult]:
        """
        Select a check-in/check-out style date range.

        Args:
            widget: Calendar widget handle of a range picker
            start: First date of the range
            end: Last date of the range
            policy: Navigation direction policy used for both picks

        Returns:
            Tuple of (start result, end result)
        """
        if isinstance(start, date):
            start = CalendarTarget.from_date(start)
        if isinstance(end, date):
            end = CalendarTarget.from_date(end)

        logger.info(
            "Selecting date range",
            extra={"start_date": str(start), "end_date": str(end)},
        )

        start_result = await self.select_target(widget, start, policy)
        await widget.wait(RANGE_PAUSE_MS)
        end_result = await self.select_target(widget, end, policy)

        return start_result, end_result


async def select_date(
    widget: CalendarWidget,
    year: Union[str, int],
    month: str,
    day: Union[str, int],
    policy: Union[NavigationPolicy, str] = NavigationPolicy.AUTO,
    config: Optional[NavigatorConfig] = None,
) -> DateSelectionResult:
    """
    Select a date on ``widget`` with a navigator built from ``config``.

    Usage:
        widget = PlaywrightCalendarWidget(page)
        await widget.open()
        await select_date(widget, "2026", "February", "4", "future")
    """
    return await CalendarNavigator(config).select_date(
        widget, year, month, day, policy
    )
