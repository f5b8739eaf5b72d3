"""Pydantic schemas for household members."""

from genealogy_census.schemas.household import (
    ChildRecord,
    MarriageRecord,
    PersonRecord,
    load_household,
)

__all__ = [
    "PersonRecord",
    "MarriageRecord",
    "ChildRecord",
    "load_household",
]
