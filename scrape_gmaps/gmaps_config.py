"""
Google Maps POI Scraper - Configuration Management

Centralized configuration for listing-page extraction.

Features:
- Playwright browser launch settings
- Navigation retry/backoff and resource blocking
- Per-field and tab activation timeouts
- Environment (.env) overrides

Author: washdb-bot
Date: 2025-11-18
"""

import os
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from dotenv import load_dotenv


@dataclass
class PlaywrightConfig:
    """Playwright browser configuration."""

    # Browser type
    browser_type: str = "chromium"  # chromium, firefox, or webkit

    # Headless mode (False = visible browser, True = headless)
    headless: bool = True

    # Custom browser binary (e.g. a system Chromium inside a container)
    executable_path: Optional[str] = None

    # Browser launch arguments
    browser_args: List[str] = field(default_factory=lambda: [
        "--disable-setuid-sandbox",
        "--no-sandbox",
        "--no-zygote",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--disable-extensions",
    ])

    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    viewport_width: int = 1920
    viewport_height: int = 1080
    locale: str = "en-US"

    # Default timeout for actions (ms)
    default_timeout: int = 60000

    # Mirror page console output into the debug log
    forward_console: bool = False

    def get_viewport(self) -> Dict[str, int]:
        """Get viewport size."""
        return {"width": self.viewport_width, "height": self.viewport_height}


@dataclass
class NavigationConfig:
    """Navigation retry configuration."""

    max_attempts: int = 3

    # Per-attempt timeout (ms)
    attempt_timeout: int = 60000

    # Wait between failed attempts (seconds)
    backoff_seconds: float = 5.0

    # "networkidle" = DOM loaded and no network activity for 500ms
    wait_until: str = "networkidle"

    # Resource types aborted before they hit the network
    blocked_resource_types: List[str] = field(default_factory=lambda: [
        "image",
        "stylesheet",
        "font",
        "media",
    ])


@dataclass
class ExtractionConfig:
    """Field and tab extraction configuration."""

    # How long each locator waits for its selector (ms)
    field_timeout: int = 5000

    # How long to look for each tab control (ms)
    tab_timeout: int = 10000

    # Tab activation gives no completion signal; wait this long after clicking
    tab_settle_seconds: float = 3.0

    # How long to wait for the activated panel to show up (ms)
    panel_timeout: int = 10000

    # Label prefix of the tab holding the About group
    about_tab_label: str = "About"


@dataclass
class GmapsConfig:
    """
    Master configuration for the Google Maps POI scraper.

    Passed explicitly into every component; nothing reads module globals.
    """

    playwright: PlaywrightConfig = field(default_factory=PlaywrightConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)

    # Logging
    log_dir: str = "logs"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    @classmethod
    def from_env(cls) -> "GmapsConfig":
        """
        Create configuration from environment variables (and .env if present).

        Returns:
            GmapsConfig instance
        """
        load_dotenv()
        config = cls()

        if os.getenv("GMAPS_HEADLESS"):
            config.playwright.headless = os.getenv("GMAPS_HEADLESS").lower() == "true"

        if os.getenv("GMAPS_BROWSER_TYPE"):
            config.playwright.browser_type = os.getenv("GMAPS_BROWSER_TYPE").lower()

        if os.getenv("GMAPS_BROWSER_EXECUTABLE_PATH"):
            config.playwright.executable_path = os.getenv("GMAPS_BROWSER_EXECUTABLE_PATH")

        if os.getenv("GMAPS_NAV_MAX_ATTEMPTS"):
            config.navigation.max_attempts = int(os.getenv("GMAPS_NAV_MAX_ATTEMPTS"))

        if os.getenv("GMAPS_NAV_TIMEOUT_MS"):
            config.navigation.attempt_timeout = int(os.getenv("GMAPS_NAV_TIMEOUT_MS"))

        if os.getenv("GMAPS_NAV_BACKOFF_SECONDS"):
            config.navigation.backoff_seconds = float(os.getenv("GMAPS_NAV_BACKOFF_SECONDS"))

        if os.getenv("GMAPS_FIELD_TIMEOUT_MS"):
            config.extraction.field_timeout = int(os.getenv("GMAPS_FIELD_TIMEOUT_MS"))

        if os.getenv("GMAPS_LOG_DIR"):
            config.log_dir = os.getenv("GMAPS_LOG_DIR")

        if os.getenv("GMAPS_LOG_LEVEL"):
            config.log_level = os.getenv("GMAPS_LOG_LEVEL")

        return config

    def validate(self) -> bool:
        """
        Validate configuration.

        Returns:
            True if valid, False otherwise
        """
        if self.playwright.browser_type not in ("chromium", "firefox", "webkit"):
            return False

        if self.navigation.max_attempts < 1:
            return False
        if self.navigation.attempt_timeout <= 0 or self.navigation.backoff_seconds < 0:
            return False

        if self.extraction.field_timeout <= 0 or self.extraction.tab_timeout <= 0:
            return False
        if self.extraction.tab_settle_seconds < 0:
            return False

        return True

    def summary(self) -> Dict[str, any]:
        """
        Get configuration summary for logging.

        Returns:
            Dictionary with key configuration values
        """
        return {
            "playwright": {
                "browser": self.playwright.browser_type,
                "headless": self.playwright.headless,
                "executable_path": self.playwright.executable_path,
            },
            "navigation": {
                "max_attempts": self.navigation.max_attempts,
                "attempt_timeout_ms": self.navigation.attempt_timeout,
                "backoff_seconds": self.navigation.backoff_seconds,
                "blocked": list(self.navigation.blocked_resource_types),
            },
            "extraction": {
                "field_timeout_ms": self.extraction.field_timeout,
                "tab_settle_seconds": self.extraction.tab_settle_seconds,
            },
        }


# Convenience function for getting default config
def get_config() -> GmapsConfig:
    """
    Get GmapsConfig instance with environment overrides.

    Returns:
        GmapsConfig instance
    """
    return GmapsConfig.from_env()
