"""
Google Maps POI Scraper - Records

Author: washdb-bot
Date: 2025-11-18
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class PoiRecord:
    """One scraped listing. Missing fields keep their empty defaults."""

    url: str
    title: str = ""
    avg_rating: Optional[float] = None
    total_number_of_reviews: Optional[int] = None
    description: str = ""
    category: str = ""
    address: str = ""
    open_hours: str = ""
    website_link: str = ""
    phone_number: str = ""
    reviews: List[str] = field(default_factory=list)
    profile_picture_url: str = ""
    about: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """Serialize with the camelCase keys API consumers expect."""
        return {
            "url": self.url,
            "title": self.title,
            "avgRating": self.avg_rating,
            "totalNumberOfReviews": self.total_number_of_reviews,
            "description": self.description,
            "category": self.category,
            "address": self.address,
            "openHours": self.open_hours,
            "websiteLink": self.website_link,
            "phoneNumber": self.phone_number,
            "reviews": list(self.reviews),
            "profilePictureUrl": self.profile_picture_url,
            "about": {title: list(items) for title, items in self.about.items()},
        }

    def populated_fields(self) -> List[str]:
        """Names of fields that hold a value."""
        return [
            key for key, value in self.to_dict().items()
            if key != "url" and value not in (None, "", [], {})
        ]


@dataclass
class AboutRecord:
    """Result of an About-only scrape."""

    url: str
    about: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {"about": {title: list(items) for title, items in self.about.items()}}
