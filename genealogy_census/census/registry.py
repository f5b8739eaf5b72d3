"""Lookup of census definitions by country and year."""

import logging
from collections.abc import Iterable, Iterator

from genealogy_census.census.definitions import CENSUSES, CensusDefinition

logger = logging.getLogger(__name__)


class CensusNotFoundError(LookupError):
    """No census is registered for the requested country and year."""

    def __init__(self, country: str, year: int):
        super().__init__(f"No census registered for {country} {year}")
        self.country = country
        self.year = year


class CensusRegistry:
    """Census definitions keyed by (country, year).

    Country names are matched case-insensitively.
    """

    def __init__(self, definitions: Iterable[CensusDefinition] = ()):
        self._definitions: dict[tuple[str, int], CensusDefinition] = {}
        for definition in definitions:
            self.register(definition)

    @staticmethod
    def _key(country: str, year: int) -> tuple[str, int]:
        return country.strip().casefold(), int(year)

    def register(self, definition: CensusDefinition) -> None:
        """Add a census definition.

        Raises:
            ValueError: If a census is already registered for the same
                country and year
        """
        key = self._key(definition.census_place(), definition.year)
        if key in self._definitions:
            raise ValueError(f"Census already registered for {definition}")
        self._definitions[key] = definition

    def get(self, country: str, year: int) -> CensusDefinition:
        """Get the census for a country and year.

        Raises:
            CensusNotFoundError: If no such census is registered
        """
        try:
            return self._definitions[self._key(country, year)]
        except KeyError:
            logger.debug("Census lookup missed: %s %s", country, year)
            raise CensusNotFoundError(country, year) from None

    def countries(self) -> list[str]:
        """Registered countries, in alphabetical order."""
        return sorted({definition.census_place() for definition in self._definitions.values()})

    def for_country(self, country: str) -> list[CensusDefinition]:
        """All censuses of one country, oldest first."""
        wanted = country.strip().casefold()
        return sorted(
            (d for (place, _), d in self._definitions.items() if place == wanted),
            key=lambda d: d.reference_date,
        )

    def __iter__(self) -> Iterator[CensusDefinition]:
        for key in sorted(self._definitions):
            yield self._definitions[key]

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        country, year = key
        return self._key(country, year) in self._definitions


# Registry of the built-in censuses
registry = CensusRegistry(CENSUSES)
