"""Census columns.

A column is one field of a historical census form: a short abbreviation, a
descriptive title and a rule that derives the cell value from a household
member's record. Columns are tagged by ``ColumnKind``; the rule for each kind
lives in ``_RULES`` rather than in a subclass per column type.

Columns are bound to the census they appear on, since several rules depend on
the census date (ages, marriage durations) or place (birthplaces).
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NamedTuple

from genealogy_census.census.record import CensusRecord, MaritalCondition

# Unmarried people younger than this have a blank condition.
ADULT_AGE = 15

# Country (last part of a place name) -> nationality.
NATIONALITIES = {
    "England": "British",
    "Scotland": "British",
    "Wales": "British",
    "Ireland": "British",
    "Isle of Man": "British",
    "Channel Islands": "British",
    "Deutschland": "German",
    "Germany": "German",
    "France": "French",
    "Italy": "Italian",
    "Netherlands": "Dutch",
    "Belgium": "Belgian",
    "Norway": "Norwegian",
    "Sweden": "Swedish",
    "Denmark": "Danish",
    "Russia": "Russian",
    "Poland": "Polish",
    "United States": "American",
    "USA": "American",
    "Mexico": "Mexican",
}

CONDITION_CODES = {
    MaritalCondition.MARRIED: "Mar",
    MaritalCondition.WIDOWED: "Wid",
    MaritalCondition.DIVORCED: "Div",
    MaritalCondition.SINGLE: "Unm",
}


class ColumnKind(str, Enum):
    """The rule a census column applies to a record."""

    FULL_NAME = "full_name"
    RELATION_TO_HEAD = "relation_to_head"
    AGE_MALE = "age_male"
    AGE_FEMALE = "age_female"
    CONDITION_ENGLISH = "condition_english"
    YEARS_MARRIED = "years_married"
    CHILDREN_BORN_ALIVE = "children_born_alive"
    CHILDREN_LIVING = "children_living"
    CHILDREN_DIED = "children_died"
    OCCUPATION = "occupation"
    BIRTH_PLACE = "birth_place"
    NATIONALITY = "nationality"
    BORN_FOREIGN_PARTS = "born_foreign_parts"
    NULL = "null"


@dataclass(frozen=True)
class CensusColumn:
    """One column of a census form, bound to its census."""

    kind: ColumnKind
    short_name: str
    long_name: str
    census_place: str
    census_date: date

    def abbreviation(self) -> str:
        """Short label used as the table header."""
        return self.short_name

    def title(self) -> str:
        """Descriptive label, as printed on the historical form."""
        return self.long_name

    def value(self, record: CensusRecord) -> str:
        """Cell value for a household member; empty when the fact is unknown."""
        return _RULES[self.kind](self, record)


class ColumnSpec(NamedTuple):
    """Unbound column descriptor, as listed in a census layout."""

    kind: ColumnKind
    abbreviation: str
    title: str

    def bind(self, place: str, when: date) -> CensusColumn:
        return CensusColumn(self.kind, self.abbreviation, self.title, place, when)


def last_place_part(place: str) -> str:
    """The most general component of a place name ("Leeds, England" -> "England")."""
    parts = [part.strip() for part in place.split(",") if part.strip()]
    return parts[-1] if parts else ""


def _count(value: int | None) -> str:
    return "" if value is None else str(value)


def _age_for_sex(sex: str) -> Callable[[CensusColumn, CensusRecord], str]:
    def rule(column: CensusColumn, record: CensusRecord) -> str:
        if record.sex() != sex:
            return ""
        age = record.age_at(column.census_date)
        if age is None or age < 0:
            return ""
        return str(age)

    return rule


def _condition_english(column: CensusColumn, record: CensusRecord) -> str:
    condition = record.condition_at(column.census_date)
    if condition is None:
        return ""
    if condition is MaritalCondition.SINGLE:
        age = record.age_at(column.census_date)
        if age is not None and age < ADULT_AGE:
            return ""
    return CONDITION_CODES[condition]


def _years_married(column: CensusColumn, record: CensusRecord) -> str:
    if record.condition_at(column.census_date) is not MaritalCondition.MARRIED:
        return ""
    return _count(record.years_married_at(column.census_date))


def _children_of_wife(query: str) -> Callable[[CensusColumn, CensusRecord], str]:
    # Fertility questions were put to women only.
    def rule(column: CensusColumn, record: CensusRecord) -> str:
        if record.sex() != "F":
            return ""
        return _count(getattr(record, query)(column.census_date))

    return rule


def _birth_place(column: CensusColumn, record: CensusRecord) -> str:
    place = record.birth_place() or ""
    parts = [part.strip() for part in place.split(",") if part.strip()]
    # Drop the country when it is the census country itself.
    if len(parts) > 1 and parts[-1].lower() == column.census_place.lower():
        parts = parts[:-1]
    return ", ".join(parts)


def _nationality(column: CensusColumn, record: CensusRecord) -> str:
    explicit = record.nationality()
    if explicit:
        return explicit
    country = last_place_part(record.birth_place() or "")
    if not country:
        return ""
    return NATIONALITIES.get(country, country)


def _born_foreign_parts(column: CensusColumn, record: CensusRecord) -> str:
    country = last_place_part(record.birth_place() or "")
    if not country or country in ("England", "Wales"):
        return ""
    if country == "Scotland":
        return "S"
    if country == "Ireland":
        return "I"
    return "F"


_RULES: dict[ColumnKind, Callable[[CensusColumn, CensusRecord], str]] = {
    ColumnKind.FULL_NAME: lambda column, record: record.full_name() or "",
    ColumnKind.RELATION_TO_HEAD: lambda column, record: record.relation_to_head() or "",
    ColumnKind.AGE_MALE: _age_for_sex("M"),
    ColumnKind.AGE_FEMALE: _age_for_sex("F"),
    ColumnKind.CONDITION_ENGLISH: _condition_english,
    ColumnKind.YEARS_MARRIED: _years_married,
    ColumnKind.CHILDREN_BORN_ALIVE: _children_of_wife("children_born_alive"),
    ColumnKind.CHILDREN_LIVING: _children_of_wife("children_living"),
    ColumnKind.CHILDREN_DIED: _children_of_wife("children_died"),
    ColumnKind.OCCUPATION: lambda column, record: record.occupation() or "",
    ColumnKind.BIRTH_PLACE: _birth_place,
    ColumnKind.NATIONALITY: _nationality,
    ColumnKind.BORN_FOREIGN_PARTS: _born_foreign_parts,
    ColumnKind.NULL: lambda column, record: "",
}
