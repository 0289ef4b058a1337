from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from deferred_records import main
from deferred_records.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from re-pointing root logging at the runner's streams."""
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)


def test_info_reports_builtin_seed():
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "seed=built-in" in result.output
    assert "records=5" in result.output


def test_get_prints_person_json():
    result = runner.invoke(app, ["get", "1"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"id": 1, "firstName": "Michael", "lastName": "Westen"}


def test_get_missing_exits_with_one():
    result = runner.invoke(app, ["get", "6"])
    assert result.exit_code == 1


def test_list_filters_by_last_name():
    result = runner.invoke(app, ["list", "--last-name", "Westen"])
    assert result.exit_code == 0
    ids = [json.loads(line)["id"] for line in result.stdout.splitlines()]
    assert ids == [1, 5]


def test_single_returns_exactly_one_match():
    result = runner.invoke(app, ["single", "--first-name", "Fiona"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["id"] == 3


@pytest.mark.parametrize(
    "args",
    [["single", "--id", "8"], ["single", "--last-name", "Westen"]],
)
def test_single_cardinality_violation_exits_with_two(args):
    result = runner.invoke(app, args)
    assert result.exit_code == 2


def test_seed_file_setting_is_honoured(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    seed_path = tmp_path / "people.json"
    seed_path.write_text(
        json.dumps([{"id": 42, "firstName": "Carla", "lastName": "Kendrick"}]), encoding="utf-8"
    )
    monkeypatch.setenv("SEED_FILE", str(seed_path))

    result = runner.invoke(app, ["get", "42"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["firstName"] == "Carla"


def test_demo_list_and_run():
    listed = runner.invoke(app, ["demo", "--name", "list"])
    assert listed.exit_code == 0
    assert "get_by_id_block" in listed.output

    ran = runner.invoke(app, ["demo", "--name", "filter_next"])
    assert ran.exit_code == 0
    (outcome,) = json.loads(ran.stdout)
    assert outcome["demo"] == "filter_next"
    assert outcome["error"] is None
