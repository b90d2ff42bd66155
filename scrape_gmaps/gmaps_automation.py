"""
Google Maps POI Scraper - Browser Automation Layer

The extraction pipeline only talks to `AutomationLayer`. `PlaywrightAutomation`
is the production implementation; tests substitute stubs.

Author: washdb-bot
Date: 2025-11-18
"""

from typing import Any, Iterable, List, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)
from playwright._impl._errors import TargetClosedError

from .gmaps_config import GmapsConfig
from .gmaps_errors import AutomationFatal
from .gmaps_logger import GmapsScraperLogger

# Substrings Playwright uses when the browser side is gone without a TargetClosedError
FATAL_ERROR_MARKERS = (
    "has been closed",
    "target closed",
    "connection closed",
    "browser closed",
    "crashed",
)


def is_fatal_error(error: BaseException) -> bool:
    """Check whether a Playwright error means the browser can no longer be driven."""
    if isinstance(error, (AutomationFatal, TargetClosedError)):
        return True
    if isinstance(error, PlaywrightTimeoutError):
        return False
    message = str(error).lower()
    return any(marker in message for marker in FATAL_ERROR_MARKERS)


class AutomationLayer:
    """
    Capability interface for driving one browser page.

    Every method is a round trip to the browser. Element handles are opaque
    to callers and only passed back into this interface.
    """

    async def __aenter__(self):
        await self.launch()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def launch(self) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        raise NotImplementedError

    async def block_resource_types(self, resource_types: Iterable[str]) -> None:
        """Abort every request whose resource type is in `resource_types`."""
        raise NotImplementedError

    async def navigate(self, url: str, timeout_ms: int, wait_until: str) -> None:
        """Load `url`; raises on failure or timeout."""
        raise NotImplementedError

    async def wait_for_selector(self, selector: str, timeout_ms: int, visible: bool = False) -> Optional[Any]:
        """Return the first matching element, or None on timeout."""
        raise NotImplementedError

    async def query_all(self, selector: str) -> List[Any]:
        raise NotImplementedError

    async def read_text(self, element: Any) -> Optional[str]:
        raise NotImplementedError

    async def read_attribute(self, element: Any, name: str) -> Optional[str]:
        raise NotImplementedError

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        raise NotImplementedError

    async def activate(self, element: Any) -> None:
        raise NotImplementedError


class PlaywrightAutomation(AutomationLayer):
    """Playwright-backed automation layer (one browser, one context, one page)."""

    def __init__(self, config: GmapsConfig, logger: GmapsScraperLogger):
        self.config = config
        self.logger = logger

        # Playwright objects
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

        self._blocked_types: frozenset = frozenset()

    async def launch(self) -> None:
        """Start Playwright and open a fresh page."""
        settings = self.config.playwright

        try:
            self.playwright = await async_playwright().start()

            if settings.browser_type == "firefox":
                browser_type = self.playwright.firefox
            elif settings.browser_type == "webkit":
                browser_type = self.playwright.webkit
            else:
                browser_type = self.playwright.chromium

            launch_kwargs = {"headless": settings.headless}
            if settings.browser_type == "chromium":
                launch_kwargs["args"] = settings.browser_args
            if settings.executable_path:
                launch_kwargs["executable_path"] = settings.executable_path

            self.browser = await browser_type.launch(**launch_kwargs)
            self.context = await self.browser.new_context(
                viewport=settings.get_viewport(),
                user_agent=settings.user_agent,
                locale=settings.locale
            )
            self.context.set_default_timeout(settings.default_timeout)
            self.context.set_default_navigation_timeout(self.config.navigation.attempt_timeout)

            self.page = await self.context.new_page()

            if settings.forward_console:
                self.page.on("console", lambda msg: self.logger.debug("Page console", {"text": msg.text}))

            self.logger.info("Playwright browser initialized", {
                "browser": settings.browser_type,
                "headless": settings.headless
            })

        except Exception as e:
            self.logger.error("Failed to initialize browser", error=e)
            await self.close()
            raise AutomationFatal(f"Could not launch browser: {e}") from e

    async def close(self) -> None:
        """Close page, context, browser and Playwright; never raises."""
        for name in ("page", "context", "browser"):
            target = getattr(self, name)
            if target is None:
                continue
            try:
                await target.close()
            except Exception as e:
                self.logger.debug(f"Error closing {name}", {"error": str(e)})
            setattr(self, name, None)

        if self.playwright is not None:
            try:
                await self.playwright.stop()
            except Exception as e:
                self.logger.debug("Error stopping Playwright", {"error": str(e)})
            self.playwright = None

        self.logger.info("Browser closed")

    def _require_page(self) -> Page:
        if self.page is None:
            raise AutomationFatal("Browser page is not available")
        return self.page

    async def _route_handler(self, route) -> None:
        """Block unnecessary resources for speed."""
        if route.request.resource_type in self._blocked_types:
            await route.abort()
        else:
            await route.continue_()

    async def block_resource_types(self, resource_types: Iterable[str]) -> None:
        self._blocked_types = frozenset(resource_types)
        if not self._blocked_types:
            return
        if self.context is None:
            raise AutomationFatal("Browser context is not available")
        try:
            await self.context.route("**/*", self._route_handler)
        except PlaywrightError as e:
            raise AutomationFatal(f"Could not install request interception: {e}") from e

    async def navigate(self, url: str, timeout_ms: int, wait_until: str) -> None:
        page = self._require_page()
        try:
            await page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightError as e:
            if is_fatal_error(e):
                raise AutomationFatal(f"Browser lost during navigation: {e}") from e
            raise

    async def wait_for_selector(self, selector: str, timeout_ms: int, visible: bool = False) -> Optional[Any]:
        page = self._require_page()
        try:
            return await page.wait_for_selector(
                selector,
                timeout=timeout_ms,
                state="visible" if visible else "attached"
            )
        except PlaywrightTimeoutError:
            return None
        except PlaywrightError as e:
            if is_fatal_error(e):
                raise AutomationFatal(str(e)) from e
            raise

    async def query_all(self, selector: str) -> List[Any]:
        page = self._require_page()
        try:
            return await page.query_selector_all(selector)
        except PlaywrightError as e:
            if is_fatal_error(e):
                raise AutomationFatal(str(e)) from e
            raise

    async def read_text(self, element: Any) -> Optional[str]:
        try:
            return await element.text_content()
        except PlaywrightError as e:
            if is_fatal_error(e):
                raise AutomationFatal(str(e)) from e
            raise

    async def read_attribute(self, element: Any, name: str) -> Optional[str]:
        try:
            return await element.get_attribute(name)
        except PlaywrightError as e:
            if is_fatal_error(e):
                raise AutomationFatal(str(e)) from e
            raise

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        page = self._require_page()
        try:
            return await page.evaluate(script, arg)
        except PlaywrightError as e:
            if is_fatal_error(e):
                raise AutomationFatal(str(e)) from e
            raise

    async def activate(self, element: Any) -> None:
        try:
            await element.click()
        except PlaywrightError as e:
            if is_fatal_error(e):
                raise AutomationFatal(str(e)) from e
            raise
