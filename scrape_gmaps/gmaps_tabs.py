"""
Google Maps POI Scraper - Tab Activation

Reveals a secondary content group (e.g. "About") hidden behind a tab.

Author: washdb-bot
Date: 2025-11-18
"""

import asyncio
from typing import List

from .gmaps_automation import AutomationLayer
from .gmaps_config import GmapsConfig
from .gmaps_errors import AutomationFatal
from .gmaps_logger import GmapsScraperLogger


def tab_selectors(label: str) -> List[str]:
    """Tab control selectors for `label`, in priority order (tab lists vary between variants)."""
    return [
        f'button[aria-label^="{label}"][role="tab"]',
        f'button[aria-label="{label}"]',
        f'[role="tablist"] button[aria-label^="{label}"]',
    ]


def panel_selectors(label: str) -> List[str]:
    """Selectors that show the activated panel has rendered."""
    return [
        f'div[role="region"][aria-label^="{label}"]',
        f'div[aria-label^="{label}"]',
        'div[role="tabpanel"]:not([hidden])',
    ]


class TabActivator:
    """Finds and clicks a tab control; a missing tab is not an error."""

    def __init__(self, automation: AutomationLayer, config: GmapsConfig, logger: GmapsScraperLogger):
        self.automation = automation
        self.config = config
        self.logger = logger

    async def activate(self, label: str = None) -> bool:
        """
        Activate the tab whose accessible label starts with `label`.

        Args:
            label: Tab label prefix (defaults to the configured About label)

        Returns:
            True if a tab was found and clicked, False if no locator matched
        """
        label = label or self.config.extraction.about_tab_label
        settings = self.config.extraction
        selectors = tab_selectors(label)

        for selector in selectors:
            try:
                tab = await self.automation.wait_for_selector(
                    selector, timeout_ms=settings.tab_timeout, visible=True
                )
                if tab is None:
                    continue
                await self.automation.activate(tab)
            except AutomationFatal:
                raise
            except Exception as e:
                self.logger.locator_error(f"tab:{label}", selector, e)
                continue

            # No completion signal from the page; a bounded wait is all we have
            await asyncio.sleep(settings.tab_settle_seconds)
            self.logger.tab_activated(label, selector)
            await self._wait_for_panel(label)
            return True

        self.logger.tab_absent(label, len(selectors))
        return False

    async def _wait_for_panel(self, label: str) -> bool:
        """Best-effort check that the activated panel rendered."""
        for selector in panel_selectors(label):
            try:
                panel = await self.automation.wait_for_selector(
                    selector, timeout_ms=self.config.extraction.panel_timeout, visible=True
                )
            except AutomationFatal:
                raise
            except Exception as e:
                self.logger.locator_error(f"panel:{label}", selector, e)
                continue
            if panel is not None:
                return True

        self.logger.debug("Panel not confirmed after tab activation", {"tab": label})
        return False
