"""
Behaviour of the repository's queries against the built-in seed data.
"""

from __future__ import annotations

import pytest

from deferred_records.infrastructure.store import RecordStore
from deferred_records.query import Cardinality, CardinalityError, Err, Ok
from deferred_records.repository import InMemoryPersonRepository, PersonRepository

MISSING_IDS = [0, 6, 8, 999]


def test_in_memory_repository_satisfies_protocol(repository: InMemoryPersonRepository):
    assert isinstance(repository, PersonRepository)


def test_get_by_id_block_returns_michael(repository: InMemoryPersonRepository):
    person = repository.get_by_id(1).block()
    assert person is not None
    assert person.first_name == "Michael"


@pytest.mark.parametrize("person_id", [1, 2, 3, 4, 5])
def test_get_by_id_yields_matching_id(repository: InMemoryPersonRepository, person_id: int):
    assert repository.get_by_id(person_id).block().id == person_id


@pytest.mark.parametrize("person_id", MISSING_IDS)
def test_get_by_id_absent_completes_empty(repository: InMemoryPersonRepository, person_id: int):
    query = repository.get_by_id(person_id)
    assert query.block() is None
    assert query.evaluate() == Ok(None)


def test_get_by_id_subscribe_delivers_once(repository: InMemoryPersonRepository):
    seen = []
    completed = []
    repository.get_by_id(1).subscribe(seen.append, on_complete=lambda: completed.append(True))
    assert [p.id for p in seen] == [1]
    assert completed == [True]


def test_get_by_id_absent_subscribe_completes_without_value(
    repository: InMemoryPersonRepository,
):
    seen, errors, completed = [], [], []
    repository.get_by_id(6).subscribe(seen.append, errors.append, lambda: completed.append(True))
    assert seen == []
    assert errors == []
    assert completed == [True]


def test_find_all_collect_matches_store(
    repository: InMemoryPersonRepository, store: RecordStore
):
    people = repository.find_all().collect().block()
    assert len(people) == len(store)
    assert people == list(store.all_records())


def test_find_all_block_first(repository: InMemoryPersonRepository):
    assert repository.find_all().block_first().id == 1


def test_filter_single_on_fiona(repository: InMemoryPersonRepository):
    query = repository.find_all().filter(lambda p: p.first_name == "Fiona").single()
    person = query.block()
    assert person is not None
    assert person.id == 3


def test_filter_single_not_found_is_cardinality_none(repository: InMemoryPersonRepository):
    result = repository.find_all().filter(lambda p: p.id == 8).single().evaluate()
    assert isinstance(result, Err)
    assert isinstance(result.error, CardinalityError)
    assert result.error.kind is Cardinality.NONE
    assert result.error.count is None


def test_filter_single_multiple_is_cardinality_multiple(repository: InMemoryPersonRepository):
    query = repository.find_all().filter(lambda p: p.last_name == "Westen").single()
    with pytest.raises(CardinalityError) as excinfo:
        query.block()
    assert excinfo.value.is_multiple
    assert excinfo.value.count == 2


def test_single_not_found_reaches_error_handler(repository: InMemoryPersonRepository):
    values, errors = [], []
    repository.find_all().filter(lambda p: p.id == 8).single().subscribe(
        values.append, errors.append
    )
    assert values == []
    assert len(errors) == 1
    assert errors[0].is_none


def test_query_evaluates_identically_twice(repository: InMemoryPersonRepository):
    query = repository.find_all().map(lambda p: p.first_name).collect()
    assert query.block() == query.block()

    lookup = repository.get_by_id(3)
    assert lookup.block() == lookup.block()


def test_query_descriptions(repository: InMemoryPersonRepository):
    assert repository.get_by_id(4).description == "get_by_id(4)"
    assert repr(repository.find_all().single()) == "SingleQuery(find_all().single())"
