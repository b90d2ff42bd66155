"""
Google Maps POI Scraper - About Subsection Extraction

Reads the title -> items mapping out of the About group once the tab has
been activated. Containers are read in one page round trip and cleaned in
Python.

Author: washdb-bot
Date: 2025-11-18
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from .gmaps_automation import AutomationLayer
from .gmaps_config import GmapsConfig
from .gmaps_errors import AutomationFatal
from .gmaps_locators import clean_text
from .gmaps_logger import GmapsScraperLogger


@dataclass(frozen=True)
class SubsectionPattern:
    """Repeated container pattern: one heading and a list of items per container."""

    container: str
    heading: str
    item: str
    # None reads trimmed item text; otherwise the named attribute
    item_attribute: Optional[str] = None

    @property
    def name(self) -> str:
        source = f"@{self.item_attribute}" if self.item_attribute else "text"
        return f"{self.container} > {self.item} ({source})"


ABOUT_PATTERNS: List[SubsectionPattern] = [
    SubsectionPattern(
        container='div.iP2t7d.fontBodyMedium',
        heading='h2.iL3Qke.fontTitleSmall',
        item='li.hpLkke span',
    ),
    SubsectionPattern(
        container='div.iP2t7d.fontBodyMedium',
        heading='h2.iL3Qke.fontTitleSmall',
        item='li.hpLkke span[aria-label]',
        item_attribute='aria-label',
    ),
    SubsectionPattern(
        container='div[role="tabpanel"]:not([hidden]) div.iP2t7d',
        heading='h2, h3, .fontTitleSmall',
        item='li',
    ),
]

READ_SUBSECTIONS_JS = """
(pattern) => Array.from(document.querySelectorAll(pattern.container)).map((section) => {
    const heading = section.querySelector(pattern.heading);
    const items = Array.from(section.querySelectorAll(pattern.item)).map((item) =>
        pattern.item_attribute ? item.getAttribute(pattern.item_attribute) : item.textContent
    );
    return { title: heading ? heading.textContent : null, items };
})
"""


def build_about_mapping(rows: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Clean raw container rows into a title -> items mapping.

    Containers without a title or without any non-empty item are dropped.
    A title seen twice keeps its first position but takes the items of
    the last container carrying it.

    Args:
        rows: Dicts with "title" and "items" as read from the page

    Returns:
        Ordered mapping of subsection title to item strings
    """
    about: Dict[str, List[str]] = {}

    for row in rows or []:
        if not isinstance(row, dict):
            continue
        title = clean_text(row.get("title"))
        items = [clean_text(item) for item in (row.get("items") or []) if isinstance(item, str)]
        items = [item for item in items if item]
        if not title or not items:
            continue
        about[title] = items

    return about


class SubsectionExtractor:
    """Extracts About subsections after the tab activator has run."""

    def __init__(
        self,
        automation: AutomationLayer,
        config: GmapsConfig,
        logger: GmapsScraperLogger,
        patterns: List[SubsectionPattern] = None
    ):
        self.automation = automation
        self.config = config
        self.logger = logger
        self.patterns = patterns or ABOUT_PATTERNS

    async def extract(self, activated: bool) -> Dict[str, List[str]]:
        """
        Extract the About mapping.

        Args:
            activated: Result of the tab activator; nothing is read when False

        Returns:
            Title -> items mapping (empty when the group is absent)
        """
        if not activated:
            return {}

        for pattern in self.patterns:
            try:
                rows = await self.automation.evaluate(READ_SUBSECTIONS_JS, asdict(pattern))
            except AutomationFatal:
                raise
            except Exception as e:
                self.logger.locator_error("about", pattern.name, e)
                continue

            about = build_about_mapping(rows)
            if about:
                self.logger.subsections_extracted(pattern.name, list(about))
                return about

        self.logger.warning("About group had no extractable subsections")
        return {}
