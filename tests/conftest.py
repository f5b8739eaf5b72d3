"""
Shared fixtures for census tests.

Provides the 1911 census of England, a small household of in-memory
records and a temporary family-tree database.
"""

from datetime import date

import pytest

from genealogy_census.census import registry
from genealogy_census.schemas import ChildRecord, MarriageRecord, PersonRecord
from genealogy_census.storage.sqlite import GenealogyDatabase


@pytest.fixture
def england_1911():
    """The 1911 census of England."""
    return registry.get("England", 1911)


@pytest.fixture
def empty_record():
    """A household member about whom nothing is known."""
    return PersonRecord()


@pytest.fixture
def husband():
    """Head of household: 40 years old, married 15 years."""
    return PersonRecord(
        name="John Smith",
        relation="Head",
        sex="M",
        birth_date=date(1870, 5, 10),
        birth_place="Leeds, Yorkshire, England",
        occupation="Coal miner",
        marriages=[MarriageRecord(married=date(1895, 6, 1))],
    )


@pytest.fixture
def wife():
    """Wife: 39 years old, two children born before the census, one since died."""
    return PersonRecord(
        name="Mary Smith",
        relation="Wife",
        sex="F",
        birth_date=date(1872, 3, 1),
        birth_place="Cardiff, Glamorgan, Wales",
        marriages=[MarriageRecord(married=date(1895, 6, 1))],
        children=[
            ChildRecord(birth_date=date(1896, 2, 2)),
            ChildRecord(birth_date=date(1898, 1, 1), death_date=date(1900, 1, 1)),
            ChildRecord(birth_date=date(1912, 1, 1)),
        ],
    )


@pytest.fixture
def son():
    """Son: 15 years old and unmarried."""
    return PersonRecord(
        name="Thomas Smith",
        relation="Son",
        sex="M",
        birth_date=date(1896, 2, 2),
        birth_place="Leeds, Yorkshire, England",
        occupation="Pit boy",
    )


@pytest.fixture
def daughter():
    """Daughter: 10 years old."""
    return PersonRecord(
        name="Ann Smith",
        relation="Daughter",
        sex="F",
        birth_date=date(1900, 9, 30),
        birth_place="Leeds, Yorkshire, England",
    )


@pytest.fixture
def db(tmp_path):
    """An empty family-tree database in a temporary directory."""
    return GenealogyDatabase(db_path=tmp_path / "tree.db")
