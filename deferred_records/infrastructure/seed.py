"""
Seed data for the record store.

The default people are compiled in; a JSON seed file (an array of objects with
``id``, ``firstName`` and ``lastName``) can replace them through the
``SEED_FILE`` setting.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import TypeAdapter

from deferred_records.config import Settings, get_settings
from deferred_records.domain.models import Person
from deferred_records.infrastructure.store import RecordStore
from deferred_records.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_PEOPLE: Tuple[Person, ...] = (
    Person(id=1, first_name="Michael", last_name="Westen"),
    Person(id=2, first_name="Sam", last_name="Axe"),
    Person(id=3, first_name="Fiona", last_name="Glenanne"),
    Person(id=4, first_name="Jesse", last_name="Porter"),
    Person(id=5, first_name="Madeline", last_name="Westen"),
)

_PEOPLE_ADAPTER = TypeAdapter(List[Person])


def load_people(path: Path | str) -> List[Person]:
    """
    Read and validate a JSON seed file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    pydantic.ValidationError
        If the content is not an array of valid person objects.
    """
    seed_path = Path(path)
    people = _PEOPLE_ADAPTER.validate_json(seed_path.read_bytes())
    log.info("Seed file loaded", extra={"seed_file": str(seed_path), "records": len(people)})
    return people


def build_store(settings: Optional[Settings] = None) -> RecordStore:
    """
    Build a record store from the configured seed file, or the defaults.
    """
    settings = settings or get_settings()
    if settings.seed_file is not None:
        return RecordStore(load_people(settings.seed_file))
    return RecordStore(DEFAULT_PEOPLE)


__all__ = ["DEFAULT_PEOPLE", "build_store", "load_people"]
