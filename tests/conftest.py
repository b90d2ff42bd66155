"""
Pytest configuration and shared fixtures for the Google Maps POI scraper tests.

Provides a stub automation layer standing in for the browser, a fast
configuration, and a logger writing into a temporary directory.
"""

import pytest

from scrape_gmaps.gmaps_automation import AutomationLayer
from scrape_gmaps.gmaps_config import GmapsConfig
from scrape_gmaps.gmaps_logger import GmapsScraperLogger


class StubElement:
    """Element handle stand-in with fixed text and attributes."""

    def __init__(self, text=None, **attrs):
        self.text = text
        self.attrs = {key.replace("_", "-"): value for key, value in attrs.items()}
        self.clicked = False


class StubAutomation(AutomationLayer):
    """
    Automation layer stand-in.

    elements: selector -> list of StubElement (first one is "the" match)
    about_rows: item selector of a subsection pattern -> raw rows returned by evaluate
    nav_failures: number of navigation attempts that fail before one succeeds
    errors: selector -> exception raised when that selector is waited on
    """

    def __init__(self, elements=None, about_rows=None, nav_failures=0, errors=None, launch_error=None):
        self.elements = elements or {}
        self.about_rows = about_rows or {}
        self.nav_failures = nav_failures
        self.errors = errors or {}
        self.launch_error = launch_error

        self.launched = False
        self.closed = False
        self.blocked = None
        self.navigations = []
        self.waited = []
        self.activated = []
        self.evaluated = []

    async def launch(self):
        if self.launch_error is not None:
            raise self.launch_error
        self.launched = True

    async def close(self):
        self.closed = True

    async def block_resource_types(self, resource_types):
        self.blocked = list(resource_types)

    async def navigate(self, url, timeout_ms, wait_until):
        self.navigations.append(url)
        if self.nav_failures < 0 or len(self.navigations) <= self.nav_failures:
            raise TimeoutError(f"Timeout {timeout_ms}ms exceeded")

    async def wait_for_selector(self, selector, timeout_ms, visible=False):
        self.waited.append(selector)
        if selector in self.errors:
            raise self.errors[selector]
        matches = self.elements.get(selector) or []
        return matches[0] if matches else None

    async def query_all(self, selector):
        return list(self.elements.get(selector) or [])

    async def read_text(self, element):
        return element.text

    async def read_attribute(self, element, name):
        return element.attrs.get(name)

    async def evaluate(self, script, arg=None):
        self.evaluated.append(arg)
        return self.about_rows.get(arg["item"], [])

    async def activate(self, element):
        element.clicked = True
        self.activated.append(element)


@pytest.fixture
def stub_element():
    return StubElement


@pytest.fixture
def stub_automation():
    return StubAutomation


@pytest.fixture
def gmaps_config():
    """Config with waits shrunk so tests never sleep."""
    config = GmapsConfig()
    config.navigation.backoff_seconds = 0
    config.extraction.tab_settle_seconds = 0
    config.extraction.field_timeout = 10
    config.extraction.tab_timeout = 10
    config.extraction.panel_timeout = 10
    return config


@pytest.fixture
def gmaps_logger(tmp_path):
    return GmapsScraperLogger(log_dir=str(tmp_path / "logs"), level="DEBUG")
