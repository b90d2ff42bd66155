"""
Unit tests for navigation retry/backoff.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from scrape_gmaps.gmaps_errors import AutomationFatal, NavigationFailed
from scrape_gmaps.gmaps_navigation import NavigationController

URL = "https://www.google.com/maps/place/Joe's+Car+Wash"


def test_prepare_blocks_non_essential_resources(stub_automation, gmaps_config, gmaps_logger):
    automation = stub_automation()
    asyncio.run(NavigationController(automation, gmaps_config, gmaps_logger).prepare())
    assert automation.blocked == ["image", "stylesheet", "font", "media"]


def test_succeeds_on_third_attempt_with_backoff_between(stub_automation, gmaps_config, gmaps_logger):
    gmaps_config.navigation.max_attempts = 3
    gmaps_config.navigation.backoff_seconds = 5.0
    automation = stub_automation(nav_failures=2)
    controller = NavigationController(automation, gmaps_config, gmaps_logger)

    with patch("scrape_gmaps.gmaps_navigation.asyncio.sleep", new_callable=AsyncMock) as sleep:
        attempts = asyncio.run(controller.navigate(URL))

    assert attempts == 3
    assert automation.navigations == [URL, URL, URL]
    assert sleep.await_count == 2
    sleep.assert_awaited_with(5.0)


def test_always_failing_navigation_raises_after_max_attempts(stub_automation, gmaps_config, gmaps_logger):
    gmaps_config.navigation.max_attempts = 3
    automation = stub_automation(nav_failures=-1)
    controller = NavigationController(automation, gmaps_config, gmaps_logger)

    with patch("scrape_gmaps.gmaps_navigation.asyncio.sleep", new_callable=AsyncMock) as sleep:
        with pytest.raises(NavigationFailed) as exc_info:
            asyncio.run(controller.navigate(URL))

    assert len(automation.navigations) == 3
    assert sleep.await_count == 2
    assert exc_info.value.attempts == 3
    assert exc_info.value.url == URL
    assert isinstance(exc_info.value.last_error, TimeoutError)


def test_first_attempt_success_does_not_sleep(stub_automation, gmaps_config, gmaps_logger):
    controller = NavigationController(stub_automation(), gmaps_config, gmaps_logger)

    with patch("scrape_gmaps.gmaps_navigation.asyncio.sleep", new_callable=AsyncMock) as sleep:
        assert asyncio.run(controller.navigate(URL)) == 1

    sleep.assert_not_awaited()


def test_automation_fatal_is_not_retried(stub_automation, gmaps_config, gmaps_logger):
    class CrashingAutomation(stub_automation):
        async def navigate(self, url, timeout_ms, wait_until):
            self.navigations.append(url)
            raise AutomationFatal("Browser has been closed")

    automation = CrashingAutomation()
    controller = NavigationController(automation, gmaps_config, gmaps_logger)

    with pytest.raises(AutomationFatal):
        asyncio.run(controller.navigate(URL))

    assert len(automation.navigations) == 1
