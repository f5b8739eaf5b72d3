"""Storage module for the family-tree database."""

from genealogy_census.storage.sqlite import (
    Event,
    GenealogyDatabase,
    Person,
    Relationship,
)

__all__ = [
    "GenealogyDatabase",
    "Person",
    "Event",
    "Relationship",
]
