from __future__ import annotations

import json
import sys
from typing import List, Optional

import typer

from deferred_records.config import get_settings
from deferred_records.demos import available_demos, run_demos
from deferred_records.domain.models import Person
from deferred_records.infrastructure.seed import build_store
from deferred_records.query import CardinalityError, Err, ManyQuery
from deferred_records.repository import InMemoryPersonRepository
from deferred_records.utils.logging import configure_logging

app = typer.Typer(help="Deferred queries over an in-memory person store.")


def _repository() -> InMemoryPersonRepository:
    return InMemoryPersonRepository(build_store(get_settings()))


def _echo_person(person: Person) -> None:
    typer.echo(person.model_dump_json(by_alias=True))


def _filtered(
    query: ManyQuery[Person],
    person_id: Optional[int],
    first_name: Optional[str],
    last_name: Optional[str],
) -> ManyQuery[Person]:
    if person_id is not None:
        query = query.filter(lambda p: p.id == person_id)
    if first_name is not None:
        query = query.filter(lambda p: p.first_name == first_name)
    if last_name is not None:
        query = query.filter(lambda p: p.last_name == last_name)
    return query


@app.callback()
def configure() -> None:
    """
    Configure logging from settings before any command runs.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    store = build_store(settings)
    seed = str(settings.seed_file) if settings.seed_file else "built-in"
    typer.echo(f"env={settings.app_env} | seed={seed} | records={len(store)}")


@app.command("get")
def get_person(person_id: int = typer.Argument(..., help="Id of the person to fetch.")) -> None:
    """
    Fetch one person by id.
    """
    person = _repository().get_by_id(person_id).block()
    if person is None:
        typer.echo(f"No person with id {person_id}.", err=True)
        raise typer.Exit(code=1)
    _echo_person(person)


@app.command("list")
def list_people(
    first_name: Optional[str] = typer.Option(None, "--first-name", "-f", help="Exact first name."),
    last_name: Optional[str] = typer.Option(None, "--last-name", "-l", help="Exact last name."),
) -> None:
    """
    Stream every matching person, one JSON object per line.
    """
    query = _filtered(_repository().find_all(), None, first_name, last_name)
    query.subscribe(_echo_person)


@app.command()
def single(
    person_id: Optional[int] = typer.Option(None, "--id", help="Exact id."),
    first_name: Optional[str] = typer.Option(None, "--first-name", "-f", help="Exact first name."),
    last_name: Optional[str] = typer.Option(None, "--last-name", "-l", help="Exact last name."),
) -> None:
    """
    Fetch exactly one matching person; exit 2 when none or several match.
    """
    query = _filtered(_repository().find_all(), person_id, first_name, last_name).single()
    result = query.evaluate()
    if isinstance(result, Err):
        if isinstance(result.error, CardinalityError):
            typer.echo(f"{result.error.kind.value}: {result.error}", err=True)
            raise typer.Exit(code=2)
        raise result.error
    _echo_person(result.value)


@app.command()
def demo(
    names: Optional[List[str]] = typer.Option(
        None,
        "--name",
        "-n",
        help="Demo to run (repeatable). Use 'list' to show available demos.",
    ),
) -> None:
    """
    Run console demonstrations of the query engine and print their outcomes.
    """
    if names and list(names) == ["list"]:
        typer.echo("Available demos: " + ", ".join(available_demos()))
        return
    outcomes = run_demos(demo_names=names or None, repository=_repository())
    typer.echo(json.dumps(outcomes, indent=2))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
