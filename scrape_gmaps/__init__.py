"""
Google Maps POI Scraper Module

Playwright-based extraction of point-of-interest records from Google Maps
listing pages, with per-field selector fallbacks.

Components:
- gmaps_url.py: Listing URL normalization
- gmaps_config.py: Configuration management
- gmaps_logger.py: Structured logging module
- gmaps_automation.py: Browser automation layer (Playwright adapter)
- gmaps_navigation.py: Navigation with retry/backoff
- gmaps_locators.py / gmaps_resolver.py: Locator table and chain resolution
- gmaps_tabs.py: Tab activation
- gmaps_about.py: About subsection extraction
- gmaps_scraper.py: Record aggregation

Author: washdb-bot
Date: 2025-11-18
"""

__version__ = '1.0.0'
__author__ = 'washdb-bot'

from .gmaps_config import GmapsConfig
from .gmaps_errors import AutomationFatal, GmapsScraperError, NavigationFailed
from .gmaps_logger import GmapsScraperLogger
from .gmaps_models import AboutRecord, PoiRecord
from .gmaps_scraper import GmapsPoiScraper, scrape_about, scrape_poi
from .gmaps_url import normalize_listing_url

__all__ = [
    'GmapsConfig',
    'GmapsScraperLogger',
    'GmapsPoiScraper',
    'PoiRecord',
    'AboutRecord',
    'NavigationFailed',
    'AutomationFatal',
    'GmapsScraperError',
    'normalize_listing_url',
    'scrape_poi',
    'scrape_about',
]
