"""
Google Maps POI Scraper - Navigation Controller

Loads a listing URL with bounded retries. This is the only step whose
failure aborts a scrape.

Author: washdb-bot
Date: 2025-11-18
"""

import asyncio
import time
from typing import Optional

from .gmaps_automation import AutomationLayer
from .gmaps_config import GmapsConfig
from .gmaps_errors import AutomationFatal, NavigationFailed
from .gmaps_logger import GmapsScraperLogger


class NavigationController:
    """Drives the automation layer to a ready listing page."""

    def __init__(self, automation: AutomationLayer, config: GmapsConfig, logger: GmapsScraperLogger):
        self.automation = automation
        self.config = config
        self.logger = logger

    async def prepare(self):
        """Install resource blocking; must run before the first navigation."""
        blocked = self.config.navigation.blocked_resource_types
        await self.automation.block_resource_types(blocked)
        self.logger.debug("Resource blocking installed", {"blocked": list(blocked)})

    async def navigate(self, url: str) -> int:
        """
        Navigate to `url`, retrying transient failures.

        Args:
            url: Normalized listing URL

        Returns:
            Number of attempts used

        Raises:
            NavigationFailed: every attempt failed
            AutomationFatal: the browser went away (not retried)
        """
        settings = self.config.navigation
        max_attempts = max(1, settings.max_attempts)
        last_error: Optional[Exception] = None

        for attempt in range(1, max_attempts + 1):
            self.logger.navigation_attempt(url, attempt, max_attempts)
            start_time = time.time()

            try:
                await self.automation.navigate(
                    url,
                    timeout_ms=settings.attempt_timeout,
                    wait_until=settings.wait_until
                )
            except AutomationFatal:
                raise
            except Exception as e:
                last_error = e
                if attempt < max_attempts:
                    self.logger.navigation_retry(url, attempt, e, settings.backoff_seconds)
                    await asyncio.sleep(settings.backoff_seconds)
                continue

            load_time_ms = int((time.time() - start_time) * 1000)
            self.logger.page_loaded(url, load_time_ms, attempts=attempt)
            return attempt

        self.logger.navigation_failed(url, max_attempts, last_error)
        raise NavigationFailed(url, max_attempts, last_error) from last_error
