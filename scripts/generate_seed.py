"""
Seed file generation script for Deferred Records.

Writes a deterministic pseudo-random JSON array of people that the CLI and
``build_store`` load when ``SEED_FILE`` points at it.
"""

from __future__ import annotations

import json
import random
import sys
import tempfile
import time
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic person seed file (JSON).")

FIRST_NAMES = ["Michael", "Fiona", "Sam", "Jesse", "Madeline", "Nate", "Larry", "Carla"]
LAST_NAMES = ["Westen", "Glenanne", "Axe", "Porter", "Kendrick", "Sizemore"]


def _generate_people(count: int, seed: int) -> list[dict]:
    rng = random.Random(seed)
    return [
        {
            "id": person_id,
            "firstName": rng.choice(FIRST_NAMES),
            "lastName": rng.choice(LAST_NAMES),
        }
        for person_id in range(1, count + 1)
    ]


def _write_seed(path: Path, people: list[dict]) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(people, f, indent=2)


@app.command()
def main(
    count: int = typer.Option(
        100,
        "--count",
        "-c",
        min=0,
        help="Number of people to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (if omitted, a temp file will be used).",
    ),
) -> None:
    """
    Generate a seed file of people with sequential ids.
    """
    start = time.perf_counter()
    if output:
        seed_path = output
        seed_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        tmpdir = Path(tempfile.mkdtemp(prefix="deferred_records_seed_"))
        seed_path = tmpdir / "people.json"

    typer.echo(f"Generating {count:,} people -> {seed_path} (seed={seed})")
    _write_seed(seed_path, _generate_people(count, seed))
    typer.echo(f"Done in {time.perf_counter() - start:.2f}s. Use SEED_FILE={seed_path}")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
