"""Genealogy Census CLI - Main entry point.

This module provides the command-line interface for the Genealogy Census project.
"""

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from genealogy_census.census import (
    CensusDefinition,
    CensusNotFoundError,
    HouseholdTranscript,
    registry,
    transcribe,
)
from genealogy_census.config import settings
from genealogy_census.logging_config import configure_logging
from genealogy_census.schemas import load_household
from genealogy_census.storage.sqlite import EVENT_TYPES, RELATIONSHIP_TYPES, GenealogyDatabase

app = typer.Typer(
    name="genecensus",
    help="Genealogy Census - Transcribe family-tree records onto historical census forms",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(
        settings.log_level, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"
    ),
) -> None:
    """Configure logging before running a command."""
    configure_logging(log_level)


def _get_census(country: str, year: int) -> CensusDefinition:
    try:
        return registry.get(country, year)
    except CensusNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[dim]Run 'genecensus censuses' to list the available censuses.[/dim]\n")
        raise typer.Exit(1) from e


def _print_transcript(transcript: HouseholdTranscript, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(transcript.to_dict()))
        return

    table = Table(
        show_header=True,
        header_style="bold cyan",
        title=f"Census of {transcript.census} ({transcript.census.census_date()})",
    )
    for header in transcript.headers:
        table.add_column(header)
    for row in transcript.rows:
        table.add_row(*row)

    console.print(table)
    console.print()


@app.command()
def censuses(
    country: str = typer.Option(None, "--country", "-c", help="Only list censuses of this country"),
) -> None:
    """List the available census forms."""
    definitions = registry.for_country(country) if country else list(registry)

    if not definitions:
        console.print(f"[yellow]No censuses found for {country}.[/yellow]\n")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold cyan", title="Census Forms")
    table.add_column("Country", style="dim")
    table.add_column("Year", justify="right")
    table.add_column("Date")
    table.add_column("Columns", justify="right")

    for definition in definitions:
        table.add_row(
            definition.census_place(),
            str(definition.year),
            definition.census_date(),
            str(len(definition.layout)),
        )

    console.print(table)
    console.print()


@app.command()
def columns(
    year: int = typer.Argument(..., help="Census year"),
    country: str = typer.Option(
        settings.default_country, "--country", "-c", help="Census country"
    ),
) -> None:
    """Show the column layout of a census form."""
    census = _get_census(country, year)

    table = Table(
        show_header=True,
        header_style="bold cyan",
        title=f"Census of {census} ({census.census_date()})",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Abbreviation")
    table.add_column("Title")
    table.add_column("Kind", style="dim")

    for index, column in enumerate(census.columns(), 1):
        table.add_row(str(index), column.abbreviation(), column.title(), column.kind.value)

    console.print(table)
    console.print()


@app.command()
def household(
    year: int = typer.Argument(..., help="Census year"),
    household_file: Path = typer.Argument(
        ..., help="JSON file with a list of household members, head first", exists=True
    ),
    country: str = typer.Option(
        settings.default_country, "--country", "-c", help="Census country"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the transcript as JSON"),
) -> None:
    """Transcribe a household described in a JSON file onto a census form."""
    census = _get_census(country, year)

    try:
        records = load_household(household_file)
    except ValidationError as e:
        console.print(f"[red]Error: not a valid household file: {household_file}[/red]")
        console.print(f"[dim]{e}[/dim]\n")
        raise typer.Exit(1) from e

    _print_transcript(transcribe(census, records), as_json)


@app.command("transcribe")
def transcribe_members(
    year: int = typer.Argument(..., help="Census year"),
    members: list[str] = typer.Argument(
        ..., help="Household members as ID or ID:Relation, head first"
    ),
    country: str = typer.Option(
        settings.default_country, "--country", "-c", help="Census country"
    ),
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
    as_json: bool = typer.Option(False, "--json", help="Print the transcript as JSON"),
) -> None:
    """Transcribe people from the family-tree database onto a census form.

    The first member is the head of the household; their relation defaults
    to "Head".
    """
    census = _get_census(country, year)
    db = GenealogyDatabase(db_path=db_path)

    records = []
    for index, member in enumerate(members):
        person_id, _, relation = member.partition(":")
        if not relation and index == 0:
            relation = "Head"
        try:
            records.append(db.load_census_record(int(person_id), relation or None))
        except ValueError as e:
            console.print(f"[red]Error: invalid member {member!r} (expected ID or ID:Relation)[/red]")
            raise typer.Exit(1) from e
        except LookupError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1) from e

    _print_transcript(transcribe(census, records), as_json)


@app.command("add-person")
def add_person(
    name: str = typer.Argument(..., help="Full name"),
    sex: str = typer.Option(None, "--sex", help="M or F"),
    notes: str = typer.Option(None, "--notes", help="Optional notes"),
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
) -> None:
    """Add a person to the family-tree database."""
    db = GenealogyDatabase(db_path=db_path)
    try:
        person = db.add_person(name, sex=sex, notes=notes)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]✓ Added person {person.id}: {person.primary_name}[/green]")


@app.command("add-event")
def add_event(
    person_id: int = typer.Argument(..., help="Person ID"),
    event_type: str = typer.Argument(..., help=f"Event type: {', '.join(EVENT_TYPES)}"),
    date: str = typer.Option(None, "--date", help="Date, e.g. '02 APR 1911'"),
    place: str = typer.Option(None, "--place", help="Place, most specific part first"),
    description: str = typer.Option(
        None, "--description", "-d", help="Occupation title, nationality, ..."
    ),
    spouse_id: int = typer.Option(None, "--spouse", help="Spouse ID for marriage or divorce"),
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
) -> None:
    """Add a life event to a person."""
    db = GenealogyDatabase(db_path=db_path)
    if db.get_person(person_id) is None:
        console.print(f"[red]Error: Person {person_id} not found[/red]")
        raise typer.Exit(1)

    try:
        event = db.add_event(
            person_id,
            event_type,
            date=date,
            place=place,
            description=description,
            related_person_id=spouse_id,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]✓ Added {event.event_type} event {event.id} to person {person_id}[/green]")


@app.command("add-relationship")
def add_relationship(
    source_id: int = typer.Argument(..., help="Source person ID (the parent, for 'parent')"),
    target_id: int = typer.Argument(..., help="Target person ID"),
    relationship_type: str = typer.Argument(
        ..., help=f"Relationship type: {', '.join(RELATIONSHIP_TYPES)}"
    ),
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
) -> None:
    """Add a relationship between two people."""
    db = GenealogyDatabase(db_path=db_path)
    try:
        rel = db.add_relationship(source_id, target_id, relationship_type)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        f"[green]✓ Added {rel.relationship_type} relationship "
        f"{rel.source_person_id} → {rel.target_person_id}[/green]"
    )


@app.command()
def stats(
    db_path: Path = typer.Option(settings.db_path, "--db", help="Path to SQLite database"),
) -> None:
    """Display statistics about the family-tree database."""
    console.print("\n[bold cyan]Genealogy Census - Database Statistics[/bold cyan]\n")

    db = GenealogyDatabase(db_path=db_path)
    db_stats = db.get_stats()

    table = Table(show_header=True, header_style="bold cyan", title="SQLite Database")
    table.add_column("Metric", style="dim")
    table.add_column("Count", justify="right")

    for key, value in db_stats.items():
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print(table)
    console.print()


@app.command()
def version() -> None:
    """Display version information."""
    from genealogy_census import __version__

    console.print(f"\n[bold cyan]Genealogy Census[/bold cyan] version {__version__}\n")


if __name__ == "__main__":
    app()
