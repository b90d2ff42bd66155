"""
Google Maps POI Scraper - Record Aggregation

Runs the full pipeline for one listing URL:
normalize -> launch -> navigate (with retries) -> resolve fields ->
activate About tab -> extract subsections -> assemble PoiRecord.

Only NavigationFailed and AutomationFatal escape; every field-level
problem degrades to that field's empty default. The browser is closed on
every exit path.

Author: washdb-bot
Date: 2025-11-18
"""

import time
from typing import Callable, Dict, List, Optional

from .gmaps_about import SubsectionExtractor
from .gmaps_automation import AutomationLayer, PlaywrightAutomation
from .gmaps_config import GmapsConfig
from .gmaps_errors import AutomationFatal, GmapsScraperError
from .gmaps_locators import FIELD_LOCATORS, FieldResult, Locator
from .gmaps_logger import GmapsScraperLogger
from .gmaps_models import AboutRecord, PoiRecord
from .gmaps_navigation import NavigationController
from .gmaps_resolver import LocatorResolver
from .gmaps_tabs import TabActivator
from .gmaps_url import extract_place_name, normalize_listing_url, skipped_steps


class GmapsPoiScraper:
    """
    Extracts POI records from Google Maps listing pages.

    One browser session per call; concurrent calls do not share state.
    """

    def __init__(
        self,
        config: GmapsConfig = None,
        logger: GmapsScraperLogger = None,
        automation_factory: Callable[[], AutomationLayer] = None,
        field_locators: Dict[str, List[Locator]] = None
    ):
        """
        Initialize the scraper.

        Args:
            config: GmapsConfig instance (loaded from env if None)
            logger: GmapsScraperLogger instance (creates new if None)
            automation_factory: Builds a fresh automation layer per call
                (Playwright if None)
            field_locators: Locator table override
        """
        self.config = config or GmapsConfig.from_env()
        self.logger = logger or GmapsScraperLogger(log_dir=self.config.log_dir, level=self.config.log_level)
        self.automation_factory = automation_factory or self._playwright_factory
        self.field_locators = field_locators or FIELD_LOCATORS

    def _playwright_factory(self) -> AutomationLayer:
        return PlaywrightAutomation(self.config, self.logger)

    def _prepare_url(self, listing_url: str) -> str:
        url = normalize_listing_url(listing_url)
        skipped = skipped_steps(listing_url)
        if skipped:
            self.logger.debug("Normalization steps skipped", {"steps": skipped})
        self.logger.set_context(url=url, place=extract_place_name(url))
        return url

    async def _open(self, automation: AutomationLayer, url: str) -> int:
        """Launch the browser and navigate; returns attempts used."""
        try:
            await automation.launch()
        except AutomationFatal:
            raise
        except Exception as e:
            raise AutomationFatal(f"Could not launch browser: {e}") from e

        navigator = NavigationController(automation, self.config, self.logger)
        await navigator.prepare()
        return await navigator.navigate(url)

    async def _close(self, automation: AutomationLayer):
        try:
            await automation.close()
        except Exception as e:
            self.logger.error("Error closing browser", error=e)

    async def _extract_about(self, automation: AutomationLayer) -> Dict[str, List[str]]:
        activated = await TabActivator(automation, self.config, self.logger).activate()
        return await SubsectionExtractor(automation, self.config, self.logger).extract(activated)

    def _build_record(self, url: str, fields: Dict[str, FieldResult], about: Dict[str, List[str]]) -> PoiRecord:
        def value(name: str, default):
            result = fields.get(name)
            return result.value_or(default) if result is not None else default

        # Primary-source snippets first; duplicates are kept
        reviews = list(value("reviews_primary", [])) + list(value("reviews_secondary", []))

        return PoiRecord(
            url=url,
            title=value("title", ""),
            avg_rating=value("avg_rating", None),
            total_number_of_reviews=value("total_number_of_reviews", None),
            description=value("description", ""),
            category=value("category", ""),
            address=value("address", ""),
            open_hours=value("open_hours", ""),
            website_link=value("website_link", ""),
            phone_number=value("phone_number", ""),
            reviews=reviews,
            profile_picture_url=value("profile_picture_url", ""),
            about=about,
        )

    async def scrape_poi(self, listing_url: str) -> PoiRecord:
        """
        Scrape one listing page into a PoiRecord.

        Args:
            listing_url: Raw Google Maps listing URL

        Returns:
            PoiRecord (fields that could not be found keep empty defaults)

        Raises:
            NavigationFailed: the page never loaded
            AutomationFatal: the browser could not be driven
        """
        url = self._prepare_url(listing_url)
        self.logger.operation_started("scrape_poi", {"url": url})
        start_time = time.time()
        automation = self.automation_factory()

        try:
            await self._open(automation, url)

            # Overview fields first: activating the About tab hides the overview panel
            fields = await LocatorResolver(automation, self.config, self.logger).resolve_many(self.field_locators)
            about = await self._extract_about(automation)

            record = self._build_record(url, fields, about)
            self.logger.poi_scraped(record.title, record.populated_fields(), time.time() - start_time)
            self.logger.operation_completed("scrape_poi")
            return record

        except GmapsScraperError as e:
            self.logger.error("POI scrape failed", error=e)
            self.logger.operation_completed("scrape_poi", result="failed")
            raise

        finally:
            await self._close(automation)
            self.logger.clear_context()

    async def scrape_about(self, listing_url: str) -> AboutRecord:
        """
        Scrape only the About group of a listing page.

        Args:
            listing_url: Raw Google Maps listing URL

        Returns:
            AboutRecord (empty mapping when the tab is absent)

        Raises:
            NavigationFailed: the page never loaded
            AutomationFatal: the browser could not be driven
        """
        url = self._prepare_url(listing_url)
        self.logger.operation_started("scrape_about", {"url": url})
        automation = self.automation_factory()

        try:
            await self._open(automation, url)
            about = await self._extract_about(automation)
            self.logger.operation_completed("scrape_about")
            return AboutRecord(url=url, about=about)

        except GmapsScraperError as e:
            self.logger.error("About scrape failed", error=e)
            self.logger.operation_completed("scrape_about", result="failed")
            raise

        finally:
            await self._close(automation)
            self.logger.clear_context()


# Convenience functions for one-off scrapes
async def scrape_poi(listing_url: str, config: Optional[GmapsConfig] = None) -> PoiRecord:
    """
    Scrape a single listing page.

    Args:
        listing_url: Raw Google Maps listing URL
        config: GmapsConfig instance

    Returns:
        PoiRecord
    """
    return await GmapsPoiScraper(config=config).scrape_poi(listing_url)


async def scrape_about(listing_url: str, config: Optional[GmapsConfig] = None) -> AboutRecord:
    """Scrape only the About group of a single listing page."""
    return await GmapsPoiScraper(config=config).scrape_about(listing_url)
