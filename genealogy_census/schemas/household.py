"""Pydantic schemas for household members.

``PersonRecord`` is the in-memory record type that census columns read. It
is built from the family-tree database or loaded from a JSON household file,
and answers the queries of ``CensusRecord``.
"""

from datetime import date
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from genealogy_census.census.dates import whole_years_between
from genealogy_census.census.record import MaritalCondition


class MarriageRecord(BaseModel):
    """A marriage of the person, and how it ended (if it did)."""

    married: date | None = Field(default=None, description="Date of the marriage")
    ended: date | None = Field(default=None, description="Date the marriage ended")
    end_reason: Literal["death", "divorce"] = Field(
        default="death", description="Death of the spouse or divorce"
    )

    def began_by(self, when: date) -> bool:
        # Undated marriages are assumed to have taken place.
        return self.married is None or self.married <= when

    def ended_by(self, when: date) -> bool:
        return self.ended is not None and self.ended <= when


class ChildRecord(BaseModel):
    """A child of the person."""

    birth_date: date | None = None
    death_date: date | None = None

    def born_by(self, when: date) -> bool:
        return self.birth_date is not None and self.birth_date <= when

    def died_by(self, when: date) -> bool:
        return self.death_date is not None and self.death_date <= when


class PersonRecord(BaseModel):
    """A household member, as read by census columns."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(default="", description="Full name")
    relation: str = Field(default="", description="Relation to head of household")
    gender: str = Field(default="", alias="sex", description="M, F or empty when unknown")
    birth_date: date | None = None
    birthplace: str = Field(default="", alias="birth_place")
    occupation_text: str = Field(default="", alias="occupation")
    nationality_text: str = Field(default="", alias="nationality")
    marriages: list[MarriageRecord] = Field(default_factory=list)
    children: list[ChildRecord] = Field(default_factory=list)

    @field_validator("gender", mode="before")
    @classmethod
    def normalise_sex(cls, value: object) -> str:
        """Accept "male"/"female" and lower-case codes."""
        if value is None:
            return ""
        text = str(value).strip().upper()[:1]
        return text if text in ("M", "F") else ""

    def full_name(self) -> str:
        return self.name

    def relation_to_head(self) -> str:
        return self.relation

    def sex(self) -> str:
        return self.gender

    def occupation(self) -> str:
        return self.occupation_text

    def birth_place(self) -> str:
        return self.birthplace

    def nationality(self) -> str:
        return self.nationality_text

    def age_at(self, when: date) -> int | None:
        if self.birth_date is None or self.birth_date > when:
            return None
        return whole_years_between(self.birth_date, when)

    def _current_marriage(self, when: date) -> MarriageRecord | None:
        begun = [m for m in self.marriages if m.began_by(when)]
        if not begun:
            return None
        # Most recent marriage; undated ones sort first.
        return max(begun, key=lambda m: m.married or date.min)

    def condition_at(self, when: date) -> MaritalCondition | None:
        marriage = self._current_marriage(when)
        if marriage is None:
            # Single only if we know the person was alive and never married.
            if self.birth_date is None or self.birth_date > when:
                return None
            return MaritalCondition.SINGLE
        if marriage.ended_by(when):
            if marriage.end_reason == "divorce":
                return MaritalCondition.DIVORCED
            return MaritalCondition.WIDOWED
        return MaritalCondition.MARRIED

    def years_married_at(self, when: date) -> int | None:
        marriage = self._current_marriage(when)
        if marriage is None or marriage.married is None or marriage.ended_by(when):
            return None
        return whole_years_between(marriage.married, when)

    def _has_family(self, when: date) -> bool:
        return bool(self.children) or self._current_marriage(when) is not None

    def children_born_alive(self, when: date) -> int | None:
        if not self._has_family(when):
            return None
        return sum(1 for child in self.children if child.born_by(when))

    def children_living(self, when: date) -> int | None:
        if not self._has_family(when):
            return None
        return sum(
            1 for child in self.children if child.born_by(when) and not child.died_by(when)
        )

    def children_died(self, when: date) -> int | None:
        if not self._has_family(when):
            return None
        return sum(1 for child in self.children if child.born_by(when) and child.died_by(when))


_household_adapter = TypeAdapter(list[PersonRecord])


def load_household(path: Path) -> list[PersonRecord]:
    """Load a household from a JSON file holding a list of people.

    Raises:
        pydantic.ValidationError: If the file does not describe a household
    """
    return _household_adapter.validate_json(Path(path).read_bytes())
