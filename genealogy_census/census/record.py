"""The person record contract read by census columns.

Census columns never touch the family-tree store directly. They query a
record through the methods below; any record type providing them can be
transcribed. A query answers None (or an empty string) when the fact is not
recorded.
"""

from datetime import date
from enum import Enum
from typing import Protocol, runtime_checkable


class MaritalCondition(str, Enum):
    """Marital condition of a person on a given date."""

    SINGLE = "single"
    MARRIED = "married"
    WIDOWED = "widowed"
    DIVORCED = "divorced"


@runtime_checkable
class CensusRecord(Protocol):
    """Queries a household member must answer to fill in a census row."""

    def full_name(self) -> str: ...

    def relation_to_head(self) -> str: ...

    def sex(self) -> str:
        """Return "M", "F" or an empty string when unknown."""
        ...

    def age_at(self, when: date) -> int | None: ...

    def condition_at(self, when: date) -> MaritalCondition | None: ...

    def years_married_at(self, when: date) -> int | None: ...

    def children_born_alive(self, when: date) -> int | None: ...

    def children_living(self, when: date) -> int | None: ...

    def children_died(self, when: date) -> int | None: ...

    def occupation(self) -> str: ...

    def birth_place(self) -> str: ...

    def nationality(self) -> str: ...
