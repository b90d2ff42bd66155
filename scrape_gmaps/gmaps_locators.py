"""
Google Maps POI Scraper - Locator Table

Multiple selector strategies for each field, in priority order. Listing
markup changes between requests and experiments, so every field carries
fallbacks; the resolver stops at the first locator that yields a
non-empty, well-formed value.

Author: washdb-bot
Date: 2025-11-18
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


class Strategy(str, Enum):
    """How a value is read from a matched element."""
    TEXT = "text"                        # trimmed text content
    ATTRIBUTE = "attribute"              # attribute value
    ATTRIBUTE_REGEX = "attribute_regex"  # first capture group of a regex over an attribute


@dataclass(frozen=True)
class Locator:
    """A selector plus the strategy used to read one value out of it."""

    selector: str
    strategy: Strategy = Strategy.TEXT
    attribute: Optional[str] = None
    pattern: Optional[str] = None
    # Post-processing; a None/empty return marks the value as malformed
    transform: Optional[Callable[[str], Any]] = None
    # Read every matching element into a list
    multiple: bool = False
    timeout_ms: Optional[int] = None

    def __post_init__(self):
        if self.strategy in (Strategy.ATTRIBUTE, Strategy.ATTRIBUTE_REGEX) and not self.attribute:
            raise ValueError(f"{self.strategy.value} locator needs an attribute: {self.selector}")
        if self.strategy == Strategy.ATTRIBUTE_REGEX and not self.pattern:
            raise ValueError(f"attribute_regex locator needs a pattern: {self.selector}")

    @property
    def name(self) -> str:
        if self.attribute:
            return f"{self.selector} @{self.attribute}"
        return self.selector


@dataclass(frozen=True)
class Found:
    """A field value and the locator that produced it."""
    value: Any
    locator: Locator

    found = True

    def value_or(self, default: Any) -> Any:
        return self.value


@dataclass(frozen=True)
class Absent:
    """A field whose locator chain was exhausted."""

    found = False
    value = None
    locator = None

    def value_or(self, default: Any) -> Any:
        return default


FieldResult = Union[Found, Absent]


# Data cleaning and normalization

# Material icon glyphs rendered inside Maps buttons live in the private use area
_ICON_GLYPHS = re.compile(r'[\ue000-\uf8ff]')

# Grouped counts ("1,234", "1.234", "1\u202f234") or a bare digit run
_COUNT = r'\d{1,3}(?:[,.\u00a0\u202f]\d{3})+(?!\d)|\d+'


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace and drop icon glyphs."""
    if not text:
        return ""
    text = _ICON_GLYPHS.sub('', text)
    return re.sub(r'\s+', ' ', text).strip()


def clean_address(text: Optional[str]) -> str:
    """Clean address text and drop button captions."""
    address = clean_text(text)
    address = re.sub(r'(Copy address|Get directions)', '', address, flags=re.IGNORECASE)
    return address.strip()


def last_line(text: Optional[str]) -> str:
    """Last non-empty newline-delimited segment of a control's text."""
    if not text:
        return ""
    lines = [clean_text(line) for line in text.split('\n')]
    lines = [line for line in lines if line]
    return lines[-1] if lines else ""


def parse_rating(text: Optional[str]) -> Optional[float]:
    """Parse a 0-5 star rating such as "4.6" or "4,6"."""
    if not text:
        return None
    match = re.search(r'(\d+(?:[.,]\d+)?)', text)
    if not match:
        return None
    rating = float(match.group(1).replace(',', '.'))
    if 0.0 <= rating <= 5.0:
        return rating
    return None


def parse_count(text: Optional[str]) -> Optional[int]:
    """Parse a review count such as "1,234" or "(1.234)"."""
    if not text:
        return None
    match = re.search(_COUNT, text)
    if not match:
        return None
    digits = re.sub(r'\D', '', match.group(0))
    return int(digits) if digits else None


def http_url(text: Optional[str]) -> str:
    """Keep only absolute http(s) URLs."""
    if text and text.strip().startswith(("http://", "https://")):
        return text.strip()
    return ""


_REVIEW_LABEL = rf'({_COUNT})\s*reviews?'

FIELD_LOCATORS: Dict[str, List[Locator]] = {
    "title": [
        Locator('h1.DUwDvf', transform=clean_text),
        Locator('h1[class*="fontHeadline"]', transform=clean_text),
        Locator('div[role="main"][aria-label]', Strategy.ATTRIBUTE, attribute="aria-label", transform=clean_text),
    ],
    "avg_rating": [
        Locator('.LBgpqf .fontBodyMedium .F7nice span span[aria-hidden="true"]', transform=parse_rating),
        Locator('div.F7nice span[aria-hidden="true"]', transform=parse_rating),
        Locator('span[role="img"][aria-label*="stars"]', Strategy.ATTRIBUTE_REGEX,
                attribute="aria-label", pattern=r'(\d+(?:[.,]\d+)?)\s*stars?', transform=parse_rating),
    ],
    "total_number_of_reviews": [
        Locator('.LBgpqf .fontBodyMedium .F7nice span span[aria-label*="reviews"]', Strategy.ATTRIBUTE_REGEX,
                attribute="aria-label", pattern=_REVIEW_LABEL, transform=parse_count),
        Locator('button[aria-label*="reviews"]', Strategy.ATTRIBUTE_REGEX,
                attribute="aria-label", pattern=_REVIEW_LABEL, transform=parse_count),
        Locator('div.F7nice span[aria-label*="reviews"]', transform=parse_count),
    ],
    "description": [
        Locator('h2.bwoZTb.fontBodyMedium span', transform=clean_text),
        Locator('h2.bwoZTb span', transform=clean_text),
    ],
    "category": [
        Locator('button.DkEaL', transform=clean_text),
        Locator('button[jsaction*="category"]', transform=clean_text),
    ],
    "address": [
        Locator('button[aria-label^="Address"]', Strategy.ATTRIBUTE_REGEX,
                attribute="aria-label", pattern=r'^Address:\s*(.+)$', transform=clean_text),
        Locator('button[data-item-id="address"]', transform=clean_address),
        Locator('button[data-tooltip*="Copy address"]', transform=clean_address),
    ],
    "open_hours": [
        Locator('.t39EBf.GUrTXd', Strategy.ATTRIBUTE, attribute="aria-label", transform=clean_text),
        Locator('div.t39EBf[aria-label]', Strategy.ATTRIBUTE, attribute="aria-label", transform=clean_text),
        Locator('div[aria-label*="Hours"]', Strategy.ATTRIBUTE, attribute="aria-label", transform=clean_text),
    ],
    "website_link": [
        Locator('a[aria-label^="Website"]', Strategy.ATTRIBUTE, attribute="href", transform=http_url),
        Locator('a[data-item-id="authority"]', Strategy.ATTRIBUTE, attribute="href", transform=http_url),
        Locator('a[data-tooltip*="Open website"]', Strategy.ATTRIBUTE, attribute="href", transform=http_url),
    ],
    "phone_number": [
        # aria-label is "Phone: <number>" but the button text ends with the bare number
        Locator('button[aria-label^="Phone"]', transform=last_line),
        Locator('button[data-item-id^="phone:tel"]', transform=last_line),
        Locator('a[href^="tel:"]', Strategy.ATTRIBUTE_REGEX,
                attribute="href", pattern=r'^tel:(.+)$', transform=clean_text),
    ],
    "profile_picture_url": [
        Locator('button.aoRNLd.kn2E5e.NMjTrf[aria-label^="Photo of"] img',
                Strategy.ATTRIBUTE, attribute="src", transform=http_url),
        Locator('button.aoRNLd[aria-label^="Photo of"] img', Strategy.ATTRIBUTE, attribute="src", transform=http_url),
        Locator('button.aoRNLd img', Strategy.ATTRIBUTE, attribute="src", transform=http_url),
    ],
    # Review snippets come from two independent sources that are concatenated
    "reviews_primary": [
        Locator('.DUGVrf [jslog*="track:click"]', Strategy.ATTRIBUTE_REGEX,
                attribute="aria-label", pattern=r'"([^"]*)"', transform=clean_text, multiple=True),
    ],
    "reviews_secondary": [
        # Review bodies keep their paragraph breaks
        Locator('.wiI7pd', multiple=True),
    ],
}
