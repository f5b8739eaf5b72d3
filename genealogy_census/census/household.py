"""Transcription of a household onto a census form."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from genealogy_census.census.definitions import CensusDefinition
from genealogy_census.census.record import CensusRecord


@dataclass
class HouseholdTranscript:
    """A household laid out in the columns of one census."""

    census: CensusDefinition
    headers: list[str]
    titles: list[str]
    rows: list[list[str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "place": self.census.census_place(),
            "date": self.census.census_date(),
            "headers": self.headers,
            "titles": self.titles,
            "rows": self.rows,
        }


def transcribe(census: CensusDefinition, records: Iterable[CensusRecord]) -> HouseholdTranscript:
    """Evaluate every column of a census for each household member.

    Args:
        census: The census to transcribe onto
        records: Household members, head first

    Returns:
        HouseholdTranscript with one row per record, in input order
    """
    columns = census.columns()
    return HouseholdTranscript(
        census=census,
        headers=[column.abbreviation() for column in columns],
        titles=[column.title() for column in columns],
        rows=[[column.value(record) for column in columns] for record in records],
    )
