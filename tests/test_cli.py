"""Tests for configuration loading and the command line entry point."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from hailstorm.cli import main
from hailstorm.config import DEFAULT_BOUND, load_config
from hailstorm.models import Bound
from hailstorm.rock import DEFAULT_ITERATIONS, DEFAULT_SEED


def write_config(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_config_applies_defaults(tmp_path: Path, sample_file: Path) -> None:
    config = load_config(write_config(tmp_path, {"input": "hail.txt"}))

    assert config.input == sample_file
    assert config.bound == Bound(*DEFAULT_BOUND)
    assert config.iterations == DEFAULT_ITERATIONS
    assert config.seed == DEFAULT_SEED
    assert config.workers == 1
    assert config.tolerance is None
    assert config.retry is False


def test_load_config_reads_overrides(tmp_path: Path, sample_file: Path) -> None:
    config = load_config(
        write_config(
            tmp_path,
            {
                "input": str(sample_file),
                "bound": {"min": 7, "max": 27},
                "iterations": 30,
                "tolerance": 1e-9,
                "workers": 4,
                "seed": [0, 0, 0, 1, 1, 1, 1, 2, 3],
                "retry": True,
            },
        )
    )

    assert config.bound == Bound(7, 27)
    assert config.iterations == 30
    assert config.tolerance == 1e-9
    assert config.workers == 4
    assert config.retry is True


@pytest.mark.parametrize(
    "data, message",
    [
        ({}, "'input'"),
        ({"input": "x", "bound": [1]}, "'bound'"),
        ({"input": "x", "bound": [1.5, 3]}, "'bound'"),
        ({"input": "x", "iterations": 0}, "'iterations'"),
        ({"input": "x", "workers": "two"}, "'workers'"),
        ({"input": "x", "seed": [1, 2, 3]}, "'seed'"),
        ({"input": "x", "tolerance": -1}, "'tolerance'"),
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, data: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        load_config(write_config(tmp_path, data))


def test_cli_prints_both_results(sample_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main([str(sample_file), "--min", "7", "--max", "27"])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["crossings = 2", "rock = 47"]


def test_cli_dump_uses_config_file(
    tmp_path: Path, sample_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = write_config(tmp_path, {"input": "hail.txt", "bound": [7, 27], "workers": 2})

    exit_code = main(["--config", str(config_path), "--dump"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["crossings"] == 2
    assert payload["rock"] == 47
    assert payload["solver"]["position"] == [24, 13, 10]


def test_cli_reports_parse_errors(tmp_path: Path) -> None:
    bad = tmp_path / "bad.txt"
    bad.write_text("1, 2, 3 @ 4, 5\n", encoding="utf-8")

    assert main([str(bad)]) == 1


def test_cli_reports_insufficient_particles(tmp_path: Path) -> None:
    short = tmp_path / "short.txt"
    short.write_text("1, 2, 3 @ 4, 5, 6\n", encoding="utf-8")

    assert main([str(short), "--min", "0", "--max", "10"]) == 1


def test_cli_requires_an_input() -> None:
    with pytest.raises(SystemExit):
        main([])
