"""
Google Maps POI Scraper - Listing URL Normalization

Listing URLs copied out of Google Maps often contain raw spaces in the place
name and an unescaped `/g/` knowledge-graph id inside the `data=` token.
Chromium navigates to the wrong place (or a search page) for both, so they
are rewritten before navigation.

Author: washdb-bot
Date: 2025-11-18
"""

from typing import Optional
from urllib.parse import unquote_plus

PLACE_MARKER = "/place/"
DATA_MARKER = "/data="
GRAPH_ID_TOKEN = "/g/"
GRAPH_ID_ESCAPED = "%2Fg%2F"


def normalize_listing_url(url: str) -> str:
    """
    Rewrite a raw listing URL into a form safe for browser navigation.

    Only two rewrites are applied:
    - spaces in the `/place/<name>` segment become `+`
    - the first `/g/` in the `data=` token becomes `%2Fg%2F`

    URLs without `/place/` or `/data=` pass through with that step skipped.
    Applying this twice to a token that still contains a second `/g/` escapes
    that one too.

    Args:
        url: Raw listing URL

    Returns:
        Normalized URL
    """
    base, sep, query = url.partition("?")
    pre_data, data_sep, data_token = base.partition(DATA_MARKER)

    head, place_sep, tail = pre_data.partition(PLACE_MARKER)
    if place_sep:
        name, slash, rest = tail.partition("/")
        pre_data = f"{head}{PLACE_MARKER}{name.replace(' ', '+')}{slash}{rest}"

    normalized = pre_data
    if data_sep:
        normalized += DATA_MARKER + data_token.replace(GRAPH_ID_TOKEN, GRAPH_ID_ESCAPED, 1)

    if sep:
        normalized += f"?{query}"

    return normalized


def skipped_steps(url: str) -> list:
    """Names of normalization steps that do not apply to this URL."""
    base = url.split("?", 1)[0]
    skipped = []
    if PLACE_MARKER not in base.split(DATA_MARKER, 1)[0]:
        skipped.append("place_name")
    if DATA_MARKER not in base:
        skipped.append("data_token")
    return skipped


def extract_place_name(url: str) -> Optional[str]:
    """
    Extract the human-readable place name from a listing URL.

    Args:
        url: Google Maps listing URL (raw or normalized)

    Returns:
        Place name or None
    """
    base = url.split("?", 1)[0]
    if PLACE_MARKER not in base:
        return None

    name = base.split(PLACE_MARKER, 1)[1].split("/", 1)[0]
    name = unquote_plus(name).strip()
    return name or None
