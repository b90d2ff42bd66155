"""
Google Maps POI Scraper - Selector Resolution

Interprets locator chains from the locator table against the automation
layer. A field that cannot be resolved comes back as `Absent`; it never
fails the record.

Author: washdb-bot
Date: 2025-11-18
"""

import asyncio
import re
from typing import Any, Dict, List, Optional, Sequence

from .gmaps_automation import AutomationLayer
from .gmaps_config import GmapsConfig
from .gmaps_errors import AutomationFatal
from .gmaps_locators import Absent, FieldResult, Found, Locator, Strategy
from .gmaps_logger import GmapsScraperLogger


def is_empty(value: Any) -> bool:
    """None, blank strings and empty collections count as no value."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def apply_strategy(locator: Locator, text: Optional[str], attribute: Optional[str]) -> Any:
    """
    Turn raw element readings into a field value.

    Args:
        locator: Locator describing the strategy
        text: Element text content (TEXT strategy)
        attribute: Attribute value (ATTRIBUTE / ATTRIBUTE_REGEX strategies)

    Returns:
        The value, or None when the reading is empty or malformed
    """
    if locator.strategy == Strategy.TEXT:
        raw = text.strip() if text else None
    elif locator.strategy == Strategy.ATTRIBUTE:
        raw = attribute.strip() if attribute else None
    else:
        if not attribute:
            return None
        match = re.search(locator.pattern, attribute, flags=re.IGNORECASE)
        if not match:
            return None
        raw = (match.group(1) if match.groups() else match.group(0)).strip()

    if is_empty(raw):
        return None
    if locator.transform is not None:
        value = locator.transform(raw)
        return None if is_empty(value) else value
    return raw


class LocatorResolver:
    """Resolves fields through ordered locator chains."""

    def __init__(self, automation: AutomationLayer, config: GmapsConfig, logger: GmapsScraperLogger):
        self.automation = automation
        self.config = config
        self.logger = logger

    async def _read(self, element: Any, locator: Locator) -> Any:
        if locator.strategy == Strategy.TEXT:
            text = await self.automation.read_text(element)
            return apply_strategy(locator, text, None)
        attribute = await self.automation.read_attribute(element, locator.attribute)
        return apply_strategy(locator, None, attribute)

    async def evaluate_locator(self, locator: Locator) -> Any:
        """
        Evaluate one locator.

        Returns:
            The value, or None when the selector never appears or the
            reading is empty/malformed
        """
        timeout_ms = locator.timeout_ms or self.config.extraction.field_timeout
        element = await self.automation.wait_for_selector(locator.selector, timeout_ms=timeout_ms)
        if element is None:
            return None

        if not locator.multiple:
            return await self._read(element, locator)

        values = []
        for match in await self.automation.query_all(locator.selector):
            value = await self._read(match, locator)
            if value is not None:
                values.append(value)
        return values or None

    async def resolve(self, field_name: str, locators: Sequence[Locator]) -> FieldResult:
        """
        Resolve one field, trying locators strictly in order.

        The first locator producing a non-empty, well-formed value wins and
        the rest are never evaluated.

        Args:
            field_name: Field being resolved (for logs)
            locators: Ordered locator chain

        Returns:
            Found(value, locator) or Absent()

        Raises:
            AutomationFatal: the browser went away mid-chain
        """
        for position, locator in enumerate(locators):
            try:
                value = await self.evaluate_locator(locator)
            except AutomationFatal:
                raise
            except Exception as e:
                self.logger.locator_error(field_name, locator.name, e)
                continue

            if not is_empty(value):
                self.logger.field_resolved(field_name, locator.name, position)
                return Found(value, locator)

        self.logger.field_absent(field_name, len(locators))
        return Absent()

    async def resolve_many(self, table: Dict[str, List[Locator]]) -> Dict[str, FieldResult]:
        """
        Resolve every field in `table` concurrently.

        Returns:
            Mapping of field name to its result
        """
        names = list(table)
        tasks = [asyncio.ensure_future(self.resolve(name, table[name])) for name in names]
        try:
            results = await asyncio.gather(*tasks)
        except AutomationFatal:
            # The browser is gone; stop sibling chains before it is closed under them
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return dict(zip(names, results))
