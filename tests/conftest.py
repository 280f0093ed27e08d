"""Pytest fixtures for durafmt tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from durafmt.cli.console import set_json_output_mode
from durafmt.config import reset_settings
from durafmt.core.formatter import DurationFormatter

GERMAN_LABELS = {
    "day": {"default": "Tage", "compact": "T", "counts": {"1": "Tag"}},
    "hour": {"default": "Stunden", "compact": "Std", "counts": {"1": "Stunde"}},
}


@pytest.fixture(autouse=True)
def reset_global_settings(monkeypatch, tmp_path):
    """Reset global settings and console state before each test.

    Tests run from an empty directory so a stray durafmt.yaml is never picked up.
    """
    monkeypatch.chdir(tmp_path)
    reset_settings()
    set_json_output_mode(False)
    yield
    reset_settings()
    set_json_output_mode(False)


@pytest.fixture
def formatter() -> DurationFormatter:
    """Formatter with the built-in English labels and default options."""
    return DurationFormatter()


@pytest.fixture
def german_labels_file(tmp_path: Path) -> Path:
    """JSON label file overriding the day and hour labels."""
    path = tmp_path / "de.json"
    path.write_text(json.dumps(GERMAN_LABELS), encoding="utf-8")
    return path


@pytest.fixture
def labels_directory(tmp_path: Path) -> Path:
    """Directory holding one JSON and one YAML label table plus unrelated entries."""
    directory = tmp_path / "languages"
    directory.mkdir()
    (directory / "de.json").write_text(json.dumps(GERMAN_LABELS), encoding="utf-8")
    (directory / "fr.yaml").write_text(
        "hour:\n  DEFAULT: heures\n  COMPACT: h\n  1: heure\n",
        encoding="utf-8",
    )
    (directory / "README.txt").write_text("not a label table", encoding="utf-8")
    (directory / "archive").mkdir()
    return directory
