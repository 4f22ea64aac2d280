"""
Calendar widget handles.

The navigator drives a widget through four capabilities only: reading an
element's text, clicking an element, enumerating the current day cells and
pausing. ``PlaywrightCalendarWidget`` provides them on top of a Playwright
page; tests supply scripted fakes with the same shape.
"""

import time
from collections.abc import Sequence
from typing import Optional, Protocol, Union

from playwright.async_api import Frame, Page

from ..utils.logger import get_logger, navigator_logger
from ..utils.metrics import get_metrics
from .config import WidgetSelectors

logger = get_logger()


class DayCell(Protocol):
    """One rendered day of the calendar grid."""

    async def inner_text(self) -> str: ...

    async def click(self) -> None: ...


class CalendarWidget(Protocol):
    """Capabilities the navigator needs from a calendar widget."""

    selectors: WidgetSelectors

    async def read_text(self, selector: str) -> str: ...

    async def click(self, selector: str) -> None: ...

    async def enumerate(self, selector: str) -> Sequence[DayCell]: ...

    async def wait(self, duration_ms: int) -> None: ...


class PlaywrightCalendarWidget:
    """
    Calendar widget backed by a Playwright page or frame.

    Every call queries the DOM again; nothing read from the page is cached.
    """

    def __init__(
        self,
        page: Union[Page, Frame],
        selectors: Optional[WidgetSelectors] = None,
        timeout: int = 15000,
    ):
        """
        Initialize the widget handle.

        Args:
            page: Playwright page (or frame) hosting the datepicker
            selectors: Selectors for the datepicker elements
            timeout: Timeout for opening the calendar in milliseconds
        """
        self.page = page
        self.selectors = selectors or WidgetSelectors()
        self.timeout = timeout

    async def open(self) -> None:
        """Click the date input and wait for the calendar overlay."""
        start_time = time.time()
        try:
            await self.page.locator(self.selectors.input).click()
            await self.page.wait_for_selector(
                self.selectors.calendar, timeout=self.timeout
            )
        except Exception as e:
            duration = time.time() - start_time
            navigator_logger.log_browser_operation(
                "open_calendar", False, duration_ms=duration * 1000, error=str(e)
            )
            get_metrics().record_browser_operation("open_calendar", False, duration)
            raise

        duration = time.time() - start_time
        navigator_logger.log_browser_operation(
            "open_calendar", True, duration_ms=duration * 1000
        )
        get_metrics().record_browser_operation("open_calendar", True, duration)

    async def read_text(self, selector: str) -> str:
        text = await self.page.locator(selector).text_content()
        return text or ""

    async def click(self, selector: str) -> None:
        await self.page.locator(selector).click()

    async def enumerate(self, selector: str) -> Sequence[DayCell]:
        cells = await self.page.locator(selector).all()
        logger.debug(
            "Enumerated day cells", extra={"selector": selector, "count": len(cells)}
        )
        return cells

    async def wait(self, duration_ms: int) -> None:
        await self.page.wait_for_timeout(duration_ms)

    async def input_value(self) -> str:
        """Return the current value of the date input field."""
        return await self.page.locator(self.selectors.input).input_value()
