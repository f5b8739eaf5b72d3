"""SQLite database for family-tree data.

This module defines the database schema for people, their life events and
their relationships, and builds the household records that census columns
read.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
    or_,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from genealogy_census.census.dates import parse_record_date
from genealogy_census.schemas import ChildRecord, MarriageRecord, PersonRecord

logger = logging.getLogger(__name__)

Base = declarative_base()

EVENT_TYPES = ("birth", "death", "marriage", "divorce", "occupation", "nationality")
RELATIONSHIP_TYPES = ("spouse", "parent")


class Person(Base):
    """Person entity."""

    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    primary_name = Column(String, nullable=False)
    sex = Column(String(1))  # M, F or NULL when unknown
    notes = Column(Text)
    created_at = Column(String, default=lambda: datetime.utcnow().isoformat())

    # Relationships
    events = relationship(
        "Event",
        back_populates="person",
        cascade="all, delete-orphan",
        foreign_keys="Event.person_id",
    )

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, name='{self.primary_name}')>"


class Event(Base):
    """Life event (birth, death, marriage, occupation, etc.)."""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True)
    person_id = Column(Integer, ForeignKey("people.id"), nullable=False)
    event_type = Column(String, nullable=False)  # birth, death, marriage, etc.
    date = Column(String)  # Stored as string to handle partial dates
    place = Column(String)
    description = Column(Text)  # Occupation title, nationality, ...
    related_person_id = Column(Integer, ForeignKey("people.id"))  # Spouse, for marriage/divorce

    # Relationships
    person = relationship("Person", back_populates="events", foreign_keys=[person_id])

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, type='{self.event_type}', person_id={self.person_id})>"


class Relationship(Base):
    """Relationship between two people.

    For "parent", the source person is the parent of the target person.
    """

    __tablename__ = "relationships"

    id = Column(Integer, primary_key=True)
    source_person_id = Column(Integer, ForeignKey("people.id"), nullable=False)
    target_person_id = Column(Integer, ForeignKey("people.id"), nullable=False)
    relationship_type = Column(String, nullable=False)  # spouse, parent
    notes = Column(Text)

    def __repr__(self) -> str:
        return (
            f"<Relationship(id={self.id}, "
            f"type='{self.relationship_type}', "
            f"source={self.source_person_id}, "
            f"target={self.target_person_id})>"
        )


class GenealogyDatabase:
    """Database manager for family-tree data."""

    def __init__(self, db_path: Path | None = None):
        """Initialize the database.

        Args:
            db_path: Path to SQLite database file (default: ./genealogy.db)
        """
        self.db_path = db_path or Path("./genealogy.db")
        self.engine = create_engine(f"sqlite:///{self.db_path}")
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine)

    def get_session(self):
        """Get a new database session."""
        return self.Session()

    def add_person(
        self, primary_name: str, sex: str | None = None, notes: str | None = None
    ) -> Person:
        """Add a person record.

        Args:
            primary_name: Primary name for the person
            sex: "M", "F" or None when unknown
            notes: Optional notes

        Returns:
            Created Person object

        Raises:
            ValueError: If sex is not M or F
        """
        if sex is not None:
            sex = sex.strip().upper()
            if sex not in ("M", "F"):
                raise ValueError(f"Sex must be M or F, got {sex!r}")

        session = self.get_session()
        try:
            person = Person(primary_name=primary_name, sex=sex, notes=notes)
            session.add(person)
            session.commit()
            session.refresh(person)
            return person
        finally:
            session.close()

    def add_event(
        self,
        person_id: int,
        event_type: str,
        date: str | None = None,
        place: str | None = None,
        description: str | None = None,
        related_person_id: int | None = None,
    ) -> Event:
        """Add a life event.

        Args:
            person_id: Person ID
            event_type: One of EVENT_TYPES
            date: Date of event ("02 APR 1911", "1911-04-02", "APR 1911" or "1911")
            place: Location
            description: Event detail (occupation title, nationality, ...)
            related_person_id: Spouse ID for marriage and divorce events

        Returns:
            Created Event object

        Raises:
            ValueError: If the event type is not known
        """
        if event_type not in EVENT_TYPES:
            raise ValueError(
                f"Unknown event type {event_type!r}; expected one of {', '.join(EVENT_TYPES)}"
            )

        session = self.get_session()
        try:
            event = Event(
                person_id=person_id,
                event_type=event_type,
                date=date,
                place=place,
                description=description,
                related_person_id=related_person_id,
            )
            session.add(event)
            session.commit()
            session.refresh(event)
            return event
        finally:
            session.close()

    def add_relationship(
        self,
        source_person_id: int,
        target_person_id: int,
        relationship_type: str,
        notes: str | None = None,
    ) -> Relationship:
        """Add a relationship between two people.

        Args:
            source_person_id: Source person ID (the parent, for "parent")
            target_person_id: Target person ID
            relationship_type: One of RELATIONSHIP_TYPES
            notes: Optional notes

        Returns:
            Created Relationship object

        Raises:
            ValueError: If the relationship type is not known
        """
        if relationship_type not in RELATIONSHIP_TYPES:
            raise ValueError(
                f"Unknown relationship type {relationship_type!r}; "
                f"expected one of {', '.join(RELATIONSHIP_TYPES)}"
            )

        session = self.get_session()
        try:
            rel = Relationship(
                source_person_id=source_person_id,
                target_person_id=target_person_id,
                relationship_type=relationship_type,
                notes=notes,
            )
            session.add(rel)
            session.commit()
            session.refresh(rel)
            return rel
        finally:
            session.close()

    def get_person(self, person_id: int) -> Person | None:
        """Get a person by ID, or None if there is no such person."""
        session = self.get_session()
        try:
            return session.query(Person).filter(Person.id == person_id).first()
        finally:
            session.close()

    def load_census_record(
        self, person_id: int, relation_to_head: str | None = None
    ) -> PersonRecord:
        """Build the household record of a person for census transcription.

        Args:
            person_id: Person ID
            relation_to_head: Relation to the head of the household being transcribed

        Returns:
            PersonRecord with the person's facts, marriages and children

        Raises:
            LookupError: If there is no person with this ID
        """
        session = self.get_session()
        try:
            person = session.query(Person).filter(Person.id == person_id).first()
            if not person:
                raise LookupError(f"Person {person_id} not found")

            events = session.query(Event).filter(Event.person_id == person_id).all()
            birth = _first_event(events, "birth")
            occupation = _first_event(events, "occupation")
            nationality = _first_event(events, "nationality")

            return PersonRecord(
                name=person.primary_name,
                relation=relation_to_head or "",
                sex=person.sex or "",
                birth_date=self._event_date(birth),
                birth_place=(birth.place or "") if birth else "",
                occupation=(occupation.description or "") if occupation else "",
                nationality=(nationality.description or "") if nationality else "",
                marriages=self._marriages(session, person_id),
                children=self._children(session, person_id),
            )
        finally:
            session.close()

    def _marriages(self, session, person_id: int) -> list[MarriageRecord]:
        # Marriage and divorce events may be recorded on either spouse.
        couple_events = (
            session.query(Event)
            .filter(
                Event.event_type.in_(("marriage", "divorce")),
                or_(Event.person_id == person_id, Event.related_person_id == person_id),
            )
            .all()
        )
        spouse_links = (
            session.query(Relationship)
            .filter(
                Relationship.relationship_type == "spouse",
                or_(
                    Relationship.source_person_id == person_id,
                    Relationship.target_person_id == person_id,
                ),
            )
            .all()
        )

        marriage_dates: dict[int, list[date]] = {}
        divorce_dates: dict[int, list[date]] = {}
        marriages = []
        for event in couple_events:
            spouse_id = _other_person(event.person_id, event.related_person_id, person_id)
            if spouse_id is None:
                if event.event_type == "marriage":
                    # Spouse unknown: nothing else can be matched to it.
                    marriages.append(MarriageRecord(married=self._event_date(event)))
                continue
            dates = marriage_dates if event.event_type == "marriage" else divorce_dates
            found = dates.setdefault(spouse_id, [])
            event_date = self._event_date(event)
            if event_date is not None:
                found.append(event_date)

        for rel in spouse_links:
            spouse_id = _other_person(rel.source_person_id, rel.target_person_id, person_id)
            if spouse_id is not None:
                marriage_dates.setdefault(spouse_id, [])

        for spouse_id, dates in marriage_dates.items():
            end_reason = "death"
            spouse_death = (
                session.query(Event)
                .filter(Event.person_id == spouse_id, Event.event_type == "death")
                .first()
            )
            ended: date | None = self._event_date(spouse_death)

            divorced = min(divorce_dates.get(spouse_id, []), default=None)
            if divorced is not None and (ended is None or divorced < ended):
                ended, end_reason = divorced, "divorce"

            marriages.append(
                MarriageRecord(married=min(dates, default=None), ended=ended, end_reason=end_reason)
            )
        return marriages

    def _children(self, session, person_id: int) -> list[ChildRecord]:
        child_ids = [
            rel.target_person_id
            for rel in session.query(Relationship)
            .filter(
                Relationship.source_person_id == person_id,
                Relationship.relationship_type == "parent",
            )
            .all()
        ]
        if not child_ids:
            return []

        children = []
        for child_id in child_ids:
            child_events = session.query(Event).filter(Event.person_id == child_id).all()
            children.append(
                ChildRecord(
                    birth_date=self._event_date(_first_event(child_events, "birth")),
                    death_date=self._event_date(_first_event(child_events, "death")),
                )
            )
        return children

    @staticmethod
    def _event_date(event: Event | None) -> date | None:
        if event is None or not event.date:
            return None
        parsed = parse_record_date(event.date)
        if parsed is None:
            logger.warning(
                "Ignoring unreadable date %r on %s event %s", event.date, event.event_type, event.id
            )
        return parsed

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics.

        Returns:
            Dictionary with database stats
        """
        session = self.get_session()
        try:
            return {
                "total_people": session.query(Person).count(),
                "total_events": session.query(Event).count(),
                "total_relationships": session.query(Relationship).count(),
            }
        finally:
            session.close()


def _first_event(events: list[Event], event_type: str) -> Event | None:
    return next((event for event in events if event.event_type == event_type), None)


def _other_person(first_id: int | None, second_id: int | None, person_id: int) -> int | None:
    """The ID on the far side of a two-person link, or None if it is missing."""
    if first_id == person_id:
        return second_id
    return first_id
