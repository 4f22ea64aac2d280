"""
Browser sessions for driving datepickers with Playwright.

``open_picker`` is the entry point: it launches Chromium, loads the page that
hosts the datepicker, opens the calendar and yields a ready
``PlaywrightCalendarWidget``. The browser is torn down when the block exits.
"""

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from ..utils.logger import get_logger
from ..utils.metrics import get_metrics
from .config import NavigatorConfig
from .exceptions import CalendarInteractionError
from .widget import PlaywrightCalendarWidget

logger = get_logger()

LAUNCH_ARGS = ["--no-sandbox", "--disable-dev-shm-usage"]
VIEWPORT = {"width": 1280, "height": 720}


class PickerSession:
    """
    One Chromium browser with a single page showing a datepicker.

    Browser settings (headless, timeout, slow motion) and the picker URL come
    from ``NavigatorConfig``.
    """

    def __init__(
        self,
        config: Optional[NavigatorConfig] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        self.config = config or NavigatorConfig()
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.page: Optional[Page] = None
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def start(self) -> Page:
        """Launch Chromium and create the page the picker is loaded into."""
        start_time = time.time()
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo_ms,
                args=LAUNCH_ARGS,
            )
            context = await self._browser.new_context(viewport=VIEWPORT)
            context.set_default_timeout(self.config.timeout_ms)
            self.page = await context.new_page()
        except Exception as e:
            get_metrics().record_browser_operation(
                "launch", False, time.time() - start_time
            )
            logger.error(
                "Failed to launch browser",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            await self.close()
            raise

        get_metrics().record_browser_operation("launch", True, time.time() - start_time)
        logger.info(
            "Browser launched",
            extra={
                "headless": self.config.headless,
                "timeout_ms": self.config.timeout_ms,
                "slow_mo_ms": self.config.slow_mo_ms,
            },
        )
        return self.page

    async def load(self, url: Optional[str] = None) -> None:
        """
        Load the picker page, retrying with exponential backoff.

        Args:
            url: Page to load, defaults to ``config.picker_url``

        Raises:
            CalendarInteractionError: If no attempt returned an OK response
        """
        if self.page is None:
            raise RuntimeError("Browser not started. Call start() first.")

        url = url or self.config.picker_url
        attempts = self.max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                response = await self.page.goto(url, wait_until="domcontentloaded")
            except PlaywrightError as e:
                logger.warning(
                    "Picker page failed to load",
                    extra={
                        "url": url,
                        "attempt": attempt,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
            else:
                if response is not None and response.ok:
                    logger.info(
                        "Picker page loaded",
                        extra={
                            "url": url,
                            "status": response.status,
                            "attempt": attempt,
                        },
                    )
                    return
                logger.warning(
                    "Picker page returned non-OK response",
                    extra={
                        "url": url,
                        "attempt": attempt,
                        "status": response.status if response else None,
                    },
                )

            if attempt < attempts:
                await asyncio.sleep(self.retry_delay * 2 ** (attempt - 1))

        get_metrics().record_navigation_error("page_load")
        raise CalendarInteractionError(
            f"Could not open {url} after {attempts} attempts"
        )

    async def close(self) -> None:
        """Close the browser and stop Playwright. Teardown errors are logged."""
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        self.page = None

        try:
            if browser:
                await browser.close()
            if playwright:
                await playwright.stop()
        except Exception as e:
            logger.warning(
                "Error during browser teardown",
                extra={"error": str(e), "error_type": type(e).__name__},
            )


@asynccontextmanager
async def open_picker(
    config: Optional[NavigatorConfig] = None, url: Optional[str] = None
) -> AsyncIterator[PlaywrightCalendarWidget]:
    """
    Launch a browser, load the picker page and open the calendar.

    Usage:
        async with open_picker(config) as widget:
            await select_date(widget, "2026", "February", "4")
    """
    config = config or NavigatorConfig()
    session = PickerSession(config)
    try:
        page = await session.start()
        await session.load(url)

        widget = PlaywrightCalendarWidget(
            page, config.selectors, timeout=config.timeout_ms
        )
        await widget.open()
        yield widget
    finally:
        await session.close()
