"""
Tests for the family-tree database.

These tests verify:
    - Adding people, events and relationships
    - Validation of event and relationship types
    - Building census records from stored data
"""

import logging
from datetime import date

import pytest

from genealogy_census.census import MaritalCondition, transcribe

CENSUS_DAY = date(1911, 4, 2)


@pytest.fixture
def smith_family(db):
    """John and Mary Smith, married 1895, with two children.

    The marriage is recorded on John only, as a family tree usually has it.
    """
    john = db.add_person("John Smith", sex="M")
    mary = db.add_person("Mary Smith", sex="f")
    thomas = db.add_person("Thomas Smith", sex="M")
    alice = db.add_person("Alice Smith", sex="F")

    db.add_event(john.id, "birth", date="10 MAY 1870", place="Leeds, Yorkshire, England")
    db.add_event(john.id, "occupation", description="Coal miner")
    db.add_event(john.id, "marriage", date="01 JUN 1895", related_person_id=mary.id)
    db.add_event(mary.id, "birth", date="1872-03-01", place="Cardiff, Glamorgan, Wales")
    db.add_event(thomas.id, "birth", date="02 FEB 1896", place="Leeds, Yorkshire, England")
    db.add_event(alice.id, "birth", date="01 JAN 1898")
    db.add_event(alice.id, "death", date="01 JAN 1900")

    for parent in (john, mary):
        for child in (thomas, alice):
            db.add_relationship(parent.id, child.id, "parent")
    db.add_relationship(john.id, mary.id, "spouse")

    return {"john": john.id, "mary": mary.id, "thomas": thomas.id, "alice": alice.id}


class TestAdding:
    """Test adding records."""

    def test_add_person(self, db):
        """Should store a person and normalise sex."""
        person = db.add_person("Jane Doe", sex="f")

        assert person.id is not None
        assert db.get_person(person.id).sex == "F"

    def test_add_person_bad_sex(self, db):
        """Should reject a sex other than M or F."""
        with pytest.raises(ValueError):
            db.add_person("Jane Doe", sex="Q")

    def test_add_event_bad_type(self, db):
        """Should reject an unknown event type."""
        person = db.add_person("Jane Doe")

        with pytest.raises(ValueError):
            db.add_event(person.id, "baptism")

    def test_add_relationship_bad_type(self, db):
        """Should reject an unknown relationship type."""
        a = db.add_person("A")
        b = db.add_person("B")

        with pytest.raises(ValueError):
            db.add_relationship(a.id, b.id, "cousin")

    def test_get_missing_person(self, db):
        """Should return None for an unknown ID."""
        assert db.get_person(999) is None

    def test_stats(self, db, smith_family):
        """Should count stored rows."""
        assert db.get_stats() == {
            "total_people": 4,
            "total_events": 7,
            "total_relationships": 5,
        }


class TestLoadCensusRecord:
    """Test building census records from the database."""

    def test_facts(self, db, smith_family):
        """Should copy name, sex, birth and occupation."""
        record = db.load_census_record(smith_family["john"], "Head")

        assert record.full_name() == "John Smith"
        assert record.relation_to_head() == "Head"
        assert record.sex() == "M"
        assert record.birth_date == date(1870, 5, 10)
        assert record.birth_place() == "Leeds, Yorkshire, England"
        assert record.occupation() == "Coal miner"
        assert record.age_at(CENSUS_DAY) == 40

    def test_marriage(self, db, smith_family):
        """Should report marriage and its length."""
        record = db.load_census_record(smith_family["mary"])

        assert record.condition_at(CENSUS_DAY) is MaritalCondition.MARRIED
        assert record.years_married_at(CENSUS_DAY) == 15
        assert record.relation_to_head() == ""

    def test_children(self, db, smith_family):
        """Should count children from parent relationships."""
        record = db.load_census_record(smith_family["mary"])

        assert record.children_born_alive(CENSUS_DAY) == 2
        assert record.children_living(CENSUS_DAY) == 1
        assert record.children_died(CENSUS_DAY) == 1

    def test_widowed(self, db, smith_family):
        """Should end a marriage at the spouse's death."""
        db.add_event(smith_family["john"], "death", date="05 MAR 1905")

        record = db.load_census_record(smith_family["mary"])

        assert record.condition_at(CENSUS_DAY) is MaritalCondition.WIDOWED

    def test_divorced(self, db, smith_family):
        """Should end a marriage at a divorce."""
        db.add_event(
            smith_family["mary"], "divorce", date="1908", related_person_id=smith_family["john"]
        )

        record = db.load_census_record(smith_family["mary"])

        assert record.condition_at(CENSUS_DAY) is MaritalCondition.DIVORCED

    def test_nationality(self, db):
        """Should read nationality from a nationality event."""
        person = db.add_person("Hans Weber", sex="M")
        db.add_event(person.id, "nationality", description="German")

        assert db.load_census_record(person.id).nationality() == "German"

    def test_unreadable_date(self, db, caplog):
        """Should log and ignore a date it cannot read."""
        person = db.add_person("Jane Doe", sex="F")
        db.add_event(person.id, "birth", date="about 1850")

        with caplog.at_level(logging.WARNING, logger="genealogy_census.storage.sqlite"):
            record = db.load_census_record(person.id)

        assert record.birth_date is None
        assert "about 1850" in caplog.text

    def test_unknown_person(self, db):
        """Should raise LookupError for an unknown ID."""
        with pytest.raises(LookupError):
            db.load_census_record(42)

    def test_transcribe(self, db, smith_family, england_1911):
        """Should transcribe stored people onto the 1911 census."""
        records = [
            db.load_census_record(smith_family["john"], "Head"),
            db.load_census_record(smith_family["mary"], "Wife"),
            db.load_census_record(smith_family["thomas"], "Son"),
        ]

        rows = transcribe(england_1911, records).rows

        assert rows[0][:6] == ["John Smith", "Head", "40", "", "Mar", "15"]
        assert rows[1][6:9] == ["2", "1", "1"]
        assert rows[1][13] == "Cardiff, Glamorgan, Wales"
        assert rows[2][4] == "Unm"


class TestOneSidedMarriage:
    """Test marriages and divorces recorded against only one spouse."""

    def test_marriage_on_husband_only(self, db, smith_family, england_1911):
        """Should show the wife as married when only the husband holds the event."""
        record = db.load_census_record(smith_family["mary"], "Wife")

        assert record.condition_at(CENSUS_DAY) is MaritalCondition.MARRIED
        assert record.years_married_at(CENSUS_DAY) == 15

        row = transcribe(england_1911, [record]).rows[0]
        assert row[4:9] == ["Mar", "15", "2", "1", "1"]

    def test_divorce_on_wife_only(self, db, smith_family):
        """Should show the husband as divorced when only the wife holds the divorce."""
        db.add_event(
            smith_family["mary"], "divorce", date="1908", related_person_id=smith_family["john"]
        )

        john = db.load_census_record(smith_family["john"])
        mary = db.load_census_record(smith_family["mary"])

        assert john.condition_at(CENSUS_DAY) is MaritalCondition.DIVORCED
        assert mary.condition_at(CENSUS_DAY) is MaritalCondition.DIVORCED
        assert john.years_married_at(CENSUS_DAY) is None

    def test_divorce_on_other_side_of_marriage(self, db):
        """Should pair a marriage on one spouse with a divorce on the other."""
        john = db.add_person("John Smith", sex="M")
        mary = db.add_person("Mary Smith", sex="F")
        db.add_event(john.id, "marriage", date="01 JUN 1895", related_person_id=mary.id)
        db.add_event(mary.id, "divorce", date="01 JAN 1905", related_person_id=john.id)

        for person_id in (john.id, mary.id):
            record = db.load_census_record(person_id)
            assert len(record.marriages) == 1
            assert record.marriages[0].married == date(1895, 6, 1)
            assert record.marriages[0].ended == date(1905, 1, 1)
            assert record.condition_at(CENSUS_DAY) is MaritalCondition.DIVORCED

    def test_marriage_on_both_sides_counted_once(self, db, smith_family):
        """Should merge the same marriage recorded on each spouse."""
        db.add_event(
            smith_family["mary"], "marriage", date="01 JUN 1895",
            related_person_id=smith_family["john"],
        )

        for person in ("john", "mary"):
            record = db.load_census_record(smith_family[person])
            assert len(record.marriages) == 1
            assert record.years_married_at(CENSUS_DAY) == 15

    def test_widowed_by_wife_death(self, db, smith_family):
        """Should end the marriage at the death of the spouse on either side."""
        db.add_event(smith_family["mary"], "death", date="05 MAR 1905")

        record = db.load_census_record(smith_family["john"])

        assert record.condition_at(CENSUS_DAY) is MaritalCondition.WIDOWED


class TestSpouseRelationship:
    """Test spouse links without a marriage event."""

    def test_spouse_link_only(self, db):
        """Should treat a spouse link as an undated marriage for both people."""
        john = db.add_person("John Smith", sex="M")
        mary = db.add_person("Mary Smith", sex="F")
        db.add_relationship(mary.id, john.id, "spouse")

        for person_id in (john.id, mary.id):
            record = db.load_census_record(person_id)
            assert len(record.marriages) == 1
            assert record.condition_at(CENSUS_DAY) is MaritalCondition.MARRIED
            assert record.years_married_at(CENSUS_DAY) is None

    def test_spouse_link_matches_marriage(self, db, smith_family):
        """Should not add a second marriage for a linked spouse with a marriage event."""
        record = db.load_census_record(smith_family["mary"])

        assert len(record.marriages) == 1
        assert record.marriages[0].married == date(1895, 6, 1)

    def test_no_spouse(self, db):
        """Should give no marriages to someone with no spouse."""
        person = db.add_person("Jane Doe", sex="F")

        assert db.load_census_record(person.id).marriages == []
