"""Maps free-text posting locations to target country codes."""

from typing import Dict, Iterable, Mapping, Optional

from app.config.defaults import DEFAULT_COUNTRY_KEYWORDS


class GeographyResolver:
    """Resolves a location string to the first target country it mentions.

    Countries are checked in table order and each keyword is a plain
    case-insensitive substring test, so "London, UK" and "Greater London"
    both resolve to UK.
    """

    def __init__(self, country_keywords: Optional[Mapping[str, Iterable[str]]] = None):
        table = country_keywords if country_keywords is not None else DEFAULT_COUNTRY_KEYWORDS
        self.country_keywords: Dict[str, tuple] = {
            country: tuple(kw.lower() for kw in keywords if kw)
            for country, keywords in table.items()
        }

    @property
    def countries(self) -> list:
        return list(self.country_keywords)

    def resolve(self, location: Optional[str]) -> Optional[str]:
        """Return the country code for a location, or None when nothing matches."""
        if not location:
            return None

        lowered = location.lower()
        for country, keywords in self.country_keywords.items():
            if any(keyword in lowered for keyword in keywords):
                return country
        return None

    def is_target(self, location: Optional[str]) -> bool:
        return self.resolve(location) is not None
