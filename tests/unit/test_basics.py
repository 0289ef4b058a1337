import json
from pathlib import Path
from time import sleep

import pytest
from pydantic import ValidationError

from deferred_records import config
from deferred_records.infrastructure import seed
from deferred_records.infrastructure.store import DuplicateRecordError
from deferred_records.utils import profiler
from scripts import generate_seed


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.app_env == "development"
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.seed_file is None


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("SEED_FILE", str(tmp_path / "people.json"))
    monkeypatch.setenv("LOG_JSON", "true")
    settings = config.get_settings()
    assert settings.seed_file == tmp_path / "people.json"
    assert settings.log_json is True


def test_default_seed_scenario_fixtures():
    ids = [p.id for p in seed.DEFAULT_PEOPLE]
    assert len(ids) == len(set(ids))
    assert 6 not in ids and 8 not in ids
    by_id = {p.id: p for p in seed.DEFAULT_PEOPLE}
    assert by_id[1].first_name == "Michael"
    assert by_id[3].first_name == "Fiona"


def test_build_store_uses_defaults_without_seed_file():
    store = seed.build_store(config.Settings())
    assert len(store) == len(seed.DEFAULT_PEOPLE)


def test_build_store_reads_seed_file(tmp_path: Path):
    seed_path = tmp_path / "people.json"
    seed_path.write_text(
        json.dumps(
            [
                {"id": 10, "firstName": "Nate", "lastName": "Westen"},
                {"id": 11, "firstName": "Larry", "lastName": "Sizemore"},
            ]
        ),
        encoding="utf-8",
    )
    store = seed.build_store(config.Settings(seed_file=seed_path))
    assert [p.id for p in store.all_records()] == [10, 11]


def test_load_people_rejects_invalid_records(tmp_path: Path):
    seed_path = tmp_path / "people.json"
    seed_path.write_text(json.dumps([{"id": "abc", "firstName": "Nate"}]), encoding="utf-8")
    with pytest.raises(ValidationError):
        seed.load_people(seed_path)


def test_build_store_rejects_duplicate_ids_in_seed_file(tmp_path: Path):
    seed_path = tmp_path / "people.json"
    person = {"id": 1, "firstName": "Nate", "lastName": "Westen"}
    seed_path.write_text(json.dumps([person, person]), encoding="utf-8")
    with pytest.raises(DuplicateRecordError):
        seed.build_store(config.Settings(seed_file=seed_path))


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.peak_rss_bytes > 0
    assert isinstance(stats.cpu_percent, float)


def test_generate_seed_writes_loadable_file(tmp_path: Path):
    seed_path = tmp_path / "people.json"
    generate_seed._write_seed(seed_path, generate_seed._generate_people(5, seed=123))

    people = seed.load_people(seed_path)
    assert [p.id for p in people] == [1, 2, 3, 4, 5]
    assert all(p.first_name in generate_seed.FIRST_NAMES for p in people)


def test_generate_seed_is_deterministic():
    assert generate_seed._generate_people(20, seed=7) == generate_seed._generate_people(20, seed=7)
