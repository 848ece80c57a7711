"""
Country Reference Catalog

Immutable lookup of Wikidata country identifiers to display labels, loaded once
at startup from a JSON array of {country, countryLabel, countryID} records and
passed explicitly to whichever component needs label resolution.
"""

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from ..types import CatalogError

logger = logging.getLogger(__name__)


def get_qnumber(country_id: str) -> str:
    """Return the final path segment of a Wikidata entity URI (e.g. 'Q30')."""
    return country_id.rstrip("/").split("/")[-1]


@dataclass(frozen=True)
class CountryInfo:
    """Catalog entry for a single country"""
    uri: str
    label: str
    code: str

    def __post_init__(self):
        """Validate entry format"""
        if not isinstance(self.label, str):
            raise ValueError(f"Country label must be a string for '{self.code}'")
        if not self.code:
            raise ValueError(f"Country code cannot be empty for '{self.label}'")

    @property
    def display(self) -> str:
        return f"{self.label} ({self.code})"


class CountryCatalog:
    """Read-only catalog of countries keyed by Wikidata code."""

    def __init__(self, countries: list[CountryInfo]):
        self._countries = tuple(countries)
        self._by_code = MappingProxyType({c.code: c for c in self._countries})

    @classmethod
    def from_records(cls, records: list[dict]) -> "CountryCatalog":
        """
        Build a catalog from decoded JSON records.

        Args:
            records: List of {country, countryLabel, countryID} mappings

        Returns:
            CountryCatalog instance

        Raises:
            CatalogError: If the records do not match the expected shape
        """
        if not isinstance(records, list):
            raise CatalogError("Country list must be a JSON array")

        countries = []
        for index, record in enumerate(records):
            try:
                country_id = record["countryID"]
                countries.append(CountryInfo(
                    uri=record.get("country", country_id),
                    label=record["countryLabel"],
                    code=get_qnumber(country_id),
                ))
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                raise CatalogError(f"Invalid country record at index {index}: {e}")

        return cls(countries)

    @classmethod
    def load(cls, path: Path) -> "CountryCatalog":
        """Load the catalog from a JSON file."""
        path = Path(path)
        try:
            with open(path, encoding='utf-8') as f:
                records = json.load(f)
        except OSError as e:
            raise CatalogError(f"Error loading country list: {e}")
        except json.JSONDecodeError as e:
            raise CatalogError(f"Error parsing country list: {e}")

        catalog = cls.from_records(records)
        logger.debug(f"Loaded {len(catalog)} countries from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._countries)

    def __iter__(self) -> Iterator[CountryInfo]:
        return iter(self._countries)

    def label_for(self, code: str) -> str:
        """Resolve a display label, falling back to the raw code."""
        country = self._by_code.get(code)
        return country.label if country and country.label else code

    def search(self, term: str) -> list[CountryInfo]:
        """Countries whose label contains the term, case-insensitively, in catalog order."""
        term_lower = term.strip().lower()
        if not term_lower:
            return []
        return [c for c in self._countries if term_lower in c.label.lower()]

    def resolve(self, identifier: str) -> CountryInfo | None:
        """
        Resolve a country by code, exact label, or unique partial label.

        Args:
            identifier: Wikidata code (e.g. 'Q30') or country name

        Returns:
            CountryInfo if exactly one country matches, None otherwise
        """
        if identifier in self._by_code:
            return self._by_code[identifier]

        identifier_upper = identifier.upper()
        if identifier_upper in self._by_code:
            return self._by_code[identifier_upper]

        identifier_lower = identifier.strip().lower()
        for country in self._countries:
            if country.label.lower() == identifier_lower:
                return country

        matches = self.search(identifier)
        return matches[0] if len(matches) == 1 else None
