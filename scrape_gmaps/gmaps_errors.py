"""
Google Maps POI Scraper - Error Types

Only two conditions abort a scrape: navigation never reaching a ready page,
and the browser itself becoming unusable. Everything else (missing fields,
missing About tab) degrades to empty values and is logged.

Author: washdb-bot
Date: 2025-11-18
"""

from typing import Optional


class GmapsScraperError(Exception):
    """Base class for fatal scraper errors."""
    pass


class NavigationFailed(GmapsScraperError):
    """Raised when every navigation attempt for a listing URL has failed."""

    def __init__(self, url: str, attempts: int, last_error: Optional[BaseException] = None):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error

        message = f"Navigation to {url} failed after {attempts} attempt(s)"
        if last_error is not None:
            message += f": {type(last_error).__name__}: {last_error}"
        super().__init__(message)


class AutomationFatal(GmapsScraperError):
    """Raised when the browser can no longer be driven (crash, disconnect, closed target)."""
    pass
