"""Historical census definitions.

Each census is plain data: a place, a reference date and the ordered column
layout of its household schedule. The column order follows the printed form
and must not be rearranged.
"""

from dataclasses import dataclass
from datetime import date

from genealogy_census.census.columns import CensusColumn, ColumnKind, ColumnSpec
from genealogy_census.census.dates import parse_census_date

K = ColumnKind


@dataclass(frozen=True)
class CensusDefinition:
    """A single census event: where, when and which columns."""

    place: str
    date_text: str
    layout: tuple[ColumnSpec, ...]

    def __post_init__(self) -> None:
        # Fails fast on a malformed descriptor.
        parse_census_date(self.date_text)

    def census_place(self) -> str:
        return self.place

    def census_date(self) -> str:
        return self.date_text

    @property
    def reference_date(self) -> date:
        return parse_census_date(self.date_text)

    @property
    def year(self) -> int:
        return self.reference_date.year

    def columns(self) -> tuple[CensusColumn, ...]:
        """Build the columns of this census, in form order."""
        when = self.reference_date
        return tuple(spec.bind(self.place, when) for spec in self.layout)

    def __str__(self) -> str:
        return f"{self.place} {self.year}"


# Columns shared by most English and Welsh household schedules.
NAME = ColumnSpec(K.FULL_NAME, "Name", "Name and surname")
RELATION = ColumnSpec(K.RELATION_TO_HEAD, "Relation", "Relation to head of household")
CONDITION = ColumnSpec(K.CONDITION_ENGLISH, "Condition", "Condition")
AGE_MALE = ColumnSpec(K.AGE_MALE, "AgeM", "Age (males)")
AGE_FEMALE = ColumnSpec(K.AGE_FEMALE, "AgeF", "Age (females)")
OCCUPATION = ColumnSpec(K.OCCUPATION, "Occupation", "Rank, profession or occupation")
BIRTHPLACE = ColumnSpec(K.BIRTH_PLACE, "Birthplace", "Where born")
LANGUAGE = ColumnSpec(K.NULL, "Lang", "Language spoken")

LAYOUT_1841 = (
    ColumnSpec(K.FULL_NAME, "Name", "Name"),
    AGE_MALE,
    AGE_FEMALE,
    ColumnSpec(K.OCCUPATION, "Occupation", "Profession, trade, employment or of independent means"),
    ColumnSpec(K.NULL, "BiC", "Born in same county"),
    ColumnSpec(K.BORN_FOREIGN_PARTS, "SIF", "Born in Scotland, Ireland or foreign parts"),
)

LAYOUT_1851 = (
    NAME,
    RELATION,
    CONDITION,
    AGE_MALE,
    AGE_FEMALE,
    OCCUPATION,
    BIRTHPLACE,
    ColumnSpec(K.NULL, "Infirm", "Whether blind or deaf-and-dumb"),
)

LAYOUT_1871 = (
    *LAYOUT_1851[:-1],
    ColumnSpec(K.NULL, "Infirm", "Whether deaf-and-dumb, blind, imbecile, idiot or lunatic"),
)

LAYOUT_1891 = (
    NAME,
    RELATION,
    CONDITION,
    AGE_MALE,
    AGE_FEMALE,
    OCCUPATION,
    ColumnSpec(K.NULL, "Empl", "Employer"),
    ColumnSpec(K.NULL, "Empd", "Employed"),
    ColumnSpec(K.NULL, "OAC", "Neither employer nor employed, but working on own account"),
    BIRTHPLACE,
    ColumnSpec(K.NULL, "Infirm", "Whether deaf-and-dumb, blind, lunatic or imbecile, idiot"),
)

LAYOUT_1901 = (
    NAME,
    RELATION,
    CONDITION,
    AGE_MALE,
    AGE_FEMALE,
    OCCUPATION,
    ColumnSpec(K.NULL, "Emp", "Employer, worker or own account"),
    ColumnSpec(K.NULL, "Home", "Working at home"),
    BIRTHPLACE,
    ColumnSpec(K.NULL, "Infirm", "Whether deaf-and-dumb, blind, lunatic, imbecile, feeble-minded"),
)

LAYOUT_1911 = (
    NAME,
    RELATION,
    AGE_MALE,
    AGE_FEMALE,
    CONDITION,
    ColumnSpec(K.YEARS_MARRIED, "YrM", "Years married"),
    ColumnSpec(K.CHILDREN_BORN_ALIVE, "ChA", "Children born alive"),
    ColumnSpec(K.CHILDREN_LIVING, "ChL", "Children who are still alive"),
    ColumnSpec(K.CHILDREN_DIED, "ChD", "Children who have died"),
    OCCUPATION,
    ColumnSpec(K.NULL, "Ind", "Industry"),
    ColumnSpec(K.NULL, "Emp", "Employer, worker or own account"),
    ColumnSpec(K.NULL, "Home", "Working at home"),
    BIRTHPLACE,
    ColumnSpec(K.NATIONALITY, "Nat", "Nationality"),
    ColumnSpec(K.NULL, "Infirm", "Infirmity"),
)

# England and Wales were enumerated on the same night, on the same schedule.
# Welsh schedules asked about language from 1891 onwards.
ENGLAND_AND_WALES = (
    ("06 JUN 1841", LAYOUT_1841),
    ("30 MAR 1851", LAYOUT_1851),
    ("07 APR 1861", LAYOUT_1851),
    ("02 APR 1871", LAYOUT_1871),
    ("03 APR 1881", LAYOUT_1871),
    ("05 APR 1891", LAYOUT_1891),
    ("31 MAR 1901", LAYOUT_1901),
    ("02 APR 1911", LAYOUT_1911),
)


def _england() -> list[CensusDefinition]:
    return [CensusDefinition("England", when, layout) for when, layout in ENGLAND_AND_WALES]


def _wales() -> list[CensusDefinition]:
    definitions = []
    for when, layout in ENGLAND_AND_WALES:
        if parse_census_date(when).year >= 1891:
            # Language follows the birthplace column.
            index = layout.index(BIRTHPLACE) + 1
            layout = (*layout[:index], LANGUAGE, *layout[index:])
        definitions.append(CensusDefinition("Wales", when, layout))
    return definitions


CENSUSES: tuple[CensusDefinition, ...] = (*_england(), *_wales())

CENSUS_OF_ENGLAND_1911 = CensusDefinition("England", "02 APR 1911", LAYOUT_1911)
