"""
Runner for named console demonstrations of the query engine.

Each demonstration composes a query against a repository and reports what it
sees through an ``emit`` callback. The runner times every demonstration and
records failures in its outcome instead of aborting the run.

Usage (example from CLI):
    from deferred_records.demos import run_demos

    outcomes = run_demos(["get_by_id_block", "single_not_found"])
    print(outcomes)
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from deferred_records.domain.models import Person
from deferred_records.infrastructure.seed import build_store
from deferred_records.repository import InMemoryPersonRepository, PersonRepository
from deferred_records.utils.logging import get_logger
from deferred_records.utils.profiler import profile_block

log = get_logger(__name__)

Emit = Callable[[str], None]
Demo = Callable[[PersonRepository, Emit], None]


def _get_by_id_block(repository: PersonRepository, emit: Emit) -> None:
    emit(str(repository.get_by_id(1).block()))


def _get_by_id_subscribe(repository: PersonRepository, emit: Emit) -> None:
    repository.get_by_id(1).subscribe(lambda person: emit(str(person)))


def _map_first_name(repository: PersonRepository, emit: Emit) -> None:
    repository.get_by_id(1).map(lambda person: person.first_name).subscribe(emit)


def _find_all_block_first(repository: PersonRepository, emit: Emit) -> None:
    emit(str(repository.find_all().block_first()))


def _find_all_subscribe(repository: PersonRepository, emit: Emit) -> None:
    repository.find_all().subscribe(lambda person: emit(str(person)))


def _find_all_map(repository: PersonRepository, emit: Emit) -> None:
    repository.find_all().map(lambda person: person.first_name).subscribe(emit)


def _collect_list(repository: PersonRepository, emit: Emit) -> None:
    def _emit_all(people: List[Person]) -> None:
        for person in people:
            emit(person.first_name)

    repository.find_all().collect().subscribe(_emit_all)


def _filter_on_name(repository: PersonRepository, emit: Emit) -> None:
    repository.find_all().filter(lambda person: person.first_name == "Fiona").subscribe(
        lambda person: emit(str(person))
    )


def _filter_next(repository: PersonRepository, emit: Emit) -> None:
    repository.find_all().filter(lambda person: person.first_name == "Fiona").next().subscribe(
        lambda person: emit(str(person))
    )


def _single_not_found(repository: PersonRepository, emit: Emit) -> None:
    missing_id = 8
    query = (
        repository.find_all()
        .filter(lambda person: person.id == missing_id)
        .single()
        .do_on_error(lambda exc: emit(f"Error in many: {exc}"))
    )
    query.subscribe(
        lambda person: emit(person.first_name),
        lambda exc: emit(f"Error in single: {exc}"),
    )


def _demo_factories() -> Dict[str, Demo]:
    """Registry of available demonstrations."""
    return {
        "get_by_id_block": _get_by_id_block,
        "get_by_id_subscribe": _get_by_id_subscribe,
        "map_first_name": _map_first_name,
        "find_all_block_first": _find_all_block_first,
        "find_all_subscribe": _find_all_subscribe,
        "find_all_map": _find_all_map,
        "collect_list": _collect_list,
        "filter_on_name": _filter_on_name,
        "filter_next": _filter_next,
        "single_not_found": _single_not_found,
    }


def available_demos() -> List[str]:
    """List available demonstration names."""
    return sorted(_demo_factories().keys())


def _resolve_demo(name: str) -> Demo:
    factories = _demo_factories()
    if name not in factories:
        raise ValueError(f"Unknown demo '{name}'. Available: {', '.join(sorted(factories))}")
    return factories[name]


def _profiled_run(name: str, demo: Demo, repository: PersonRepository) -> dict:
    output: List[str] = []
    error: Optional[str] = None
    log.info(f"[DEMO START] {name}", extra={"demo": name})
    with profile_block(name) as stats:
        try:
            demo(repository, output.append)
            log.info(f"[DEMO SUCCESS] {name}", extra={"demo": name, "lines": len(output)})
        except Exception as exc:  # noqa: BLE001 - intentional broad catch to record failures
            log.exception(f"[DEMO FAILED] {name}", extra={"demo": name})
            error = str(exc)

    return {
        "demo": name,
        "output": output,
        "error": error,
        "duration_seconds": round(stats.duration_seconds, 6),
        "peak_rss_bytes": stats.peak_rss_bytes,
    }


def run_demos(
    demo_names: Optional[Iterable[str]] = None,
    repository: Optional[PersonRepository] = None,
) -> List[dict]:
    """
    Run one or more demonstrations.

    Parameters
    ----------
    demo_names : iterable[str] | None
        Demonstrations to run. If None or ["all"], runs all available.
    repository : PersonRepository | None
        Repository to query. Defaults to one over the configured seed data.

    Returns
    -------
    List[dict]
        One outcome per demonstration with its emitted lines, error (or
        None), duration and peak RSS.
    """
    names = list(demo_names) if demo_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        names = available_demos()
    demos = [(name, _resolve_demo(name)) for name in names]

    repository = repository or InMemoryPersonRepository(build_store())
    outcomes = [_profiled_run(name, demo, repository) for name, demo in demos]

    log.info(
        f"[DEMOS COMPLETE] {len(outcomes)} demo(s) executed",
        extra={"demos": names, "failed": sum(1 for o in outcomes if o["error"])},
    )
    return outcomes


__all__ = ["available_demos", "run_demos"]
