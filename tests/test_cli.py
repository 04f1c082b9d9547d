"""
Tests for the stockroute CLI.
"""

import logging

import pytest
import yaml
from typer.testing import CliRunner

from stockroute import __version__
from stockroute.backends.memory import load_world
from stockroute.main import app
from stockroute.observability import read_events

runner = CliRunner()


@pytest.fixture
def world_file(tmp_path):
    data = {
        "source": "S",
        "inventories": {
            "S": {"slots": {1: {"item": "stone", "count": 5, "label": "Stone"}, 2: {"item": "glass", "count": 3}}},
            "chest_1": {"slots": {1: {"item": "wood", "count": 1}}},
            "chest_2": {"slots": {1: {"item": "stone", "count": 1}}},
            "F": {},
        },
    }
    path = tmp_path / "world.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture(autouse=True)
def restore_logging():
    """The run command reconfigures root logging; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def chest_env(monkeypatch):
    monkeypatch.setenv("STOCKROUTE_DESTINATION_PATTERN", "chest_{index}")
    monkeypatch.setenv("STOCKROUTE_FIRST_INDEX", "1")
    monkeypatch.setenv("STOCKROUTE_LAST_INDEX", "3")
    monkeypatch.setenv("STOCKROUTE_FALLBACK_NAME", "F")


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_shows_settings():
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "batch_size" in result.output


def test_check(world_file):
    result = runner.invoke(app, ["check", str(world_file)])
    assert result.exit_code == 0
    assert "Source: S" in result.output
    assert "Destinations: 2" in result.output
    assert "Fallback: F" in result.output


def test_check_missing_source(world_file):
    result = runner.invoke(app, ["check", str(world_file), "--source", "nowhere"])
    assert result.exit_code == 1
    assert "nowhere" in result.output


def test_run_cycles(world_file, tmp_path):
    saved = tmp_path / "after.yaml"
    logs = tmp_path / "logs"

    result = runner.invoke(app, [
        "run", str(world_file), "--cycles", "2", "--save", str(saved), "--event-log", str(logs),
    ])

    assert result.exit_code == 0, result.output
    assert "[OK] Moved 5 x Stone (slot 1) -> chest_2" in result.output
    assert "[FALLBACK] Moved 3 x glass (slot 2) -> F" in result.output
    assert "Outcomes over 2 cycle(s)" in result.output

    after = load_world(saved)
    assert after.get("S").slots == {}
    assert after.get("chest_2").count("stone") == 6
    assert after.get("F").count("glass") == 3

    log_files = list(logs.glob("run_*.jsonl"))
    assert len(log_files) == 1
    entries = read_events(log_files[0])
    assert [e["event"] for e in entries].count("cycle_end") == 2


def test_run_rejects_bad_batch_size(world_file):
    result = runner.invoke(app, ["run", str(world_file), "--cycles", "1", "--batch-size", "0"])
    assert result.exit_code != 0


def test_run_bad_world(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("source: S\n")
    result = runner.invoke(app, ["run", str(path), "--cycles", "1"])
    assert result.exit_code == 1
    assert "inventories" in result.output
