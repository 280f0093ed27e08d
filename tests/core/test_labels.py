"""Tests for durafmt.core.labels module."""

from __future__ import annotations

import json

import pytest

from durafmt.core.exceptions import LabelTableError
from durafmt.core.labels import (
    DEFAULT_LABELS,
    UnitLabel,
    build_label_table,
    load_label_table,
    load_label_tables,
)
from durafmt.core.units import TimeUnit


class TestUnitLabel:
    """Test count-specific label selection."""

    def test_label_for(self):
        """Test that exact counts override the default label."""
        label = UnitLabel(default="hours", compact="h", counts={1: "hour"})
        assert label.label_for(1) == "hour"
        assert label.label_for(2) == "hours"
        assert label.label_for(0) == "hours"

    def test_default_table_covers_every_unit(self):
        """Test that the built-in table has a label for every unit."""
        assert set(DEFAULT_LABELS) == set(TimeUnit)


class TestBuildLabelTable:
    """Test merging overrides over a base table."""

    def test_partial_override(self):
        """Test that missing fields fall back to the base label."""
        table = build_label_table({"hour": {"default": "Stunden"}})
        assert table[TimeUnit.HOUR].default == "Stunden"
        assert table[TimeUnit.HOUR].compact == "h"
        assert table[TimeUnit.HOUR].label_for(1) == "hour"
        assert table[TimeUnit.DAY] == DEFAULT_LABELS[TimeUnit.DAY]

    def test_uppercase_and_numeric_keys(self):
        """Test the DEFAULT/COMPACT and bare count key layout."""
        table = build_label_table({"day": {"DEFAULT": "Tage", "COMPACT": "T", "1": "Tag"}})
        assert table[TimeUnit.DAY] == UnitLabel(default="Tage", compact="T", counts={1: "Tag"})

    def test_unknown_unit(self):
        """Test that unknown unit identifiers are rejected."""
        with pytest.raises(LabelTableError, match="fortnight"):
            build_label_table({"fortnight": {"default": "Wochen"}})

    @pytest.mark.parametrize(
        "descriptor",
        [
            {"plural": "Stunden"},
            {"default": ""},
            {"counts": {"one": "Stunde"}},
            {"counts": ["Stunde"]},
            "Stunden",
        ],
    )
    def test_invalid_descriptor(self, descriptor):
        """Test that malformed descriptors raise LabelTableError."""
        with pytest.raises(LabelTableError, match="hour"):
            build_label_table({"hour": descriptor})

    def test_table_is_read_only(self):
        """Test that the merged table cannot be modified."""
        table = build_label_table({"hour": {"default": "Stunden"}})
        with pytest.raises(TypeError):
            table[TimeUnit.HOUR] = DEFAULT_LABELS[TimeUnit.HOUR]


class TestLoadLabelTable:
    """Test loading a label table from a file."""

    def test_json_file(self, german_labels_file):
        """Test loading a JSON label file."""
        table = load_label_table(german_labels_file)
        assert table[TimeUnit.HOUR].label_for(1) == "Stunde"
        assert table[TimeUnit.HOUR].label_for(3) == "Stunden"
        assert table[TimeUnit.DAY].compact == "T"
        assert table[TimeUnit.MINUTE] == DEFAULT_LABELS[TimeUnit.MINUTE]

    def test_yaml_file(self, tmp_path):
        """Test loading a YAML label file with integer count keys."""
        path = tmp_path / "fr.yml"
        path.write_text("hour:\n  default: heures\n  1: heure\n", encoding="utf-8")
        table = load_label_table(path)
        assert table[TimeUnit.HOUR].label_for(1) == "heure"
        assert table[TimeUnit.HOUR].default == "heures"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        """Test that an empty file leaves the base labels untouched."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert dict(load_label_table(path)) == dict(DEFAULT_LABELS)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises LabelTableError."""
        with pytest.raises(LabelTableError, match="not found") as exc_info:
            load_label_table(tmp_path / "missing.json")
        assert exc_info.value.path.endswith("missing.json")

    def test_unsupported_suffix(self, tmp_path):
        """Test that only JSON and YAML files are accepted."""
        path = tmp_path / "labels.toml"
        path.write_text("[hour]\n", encoding="utf-8")
        with pytest.raises(LabelTableError, match="Unsupported"):
            load_label_table(path)

    def test_malformed_json(self, tmp_path):
        """Test that invalid JSON raises LabelTableError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LabelTableError, match="malformed"):
            load_label_table(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        """Test that a list at the top level is rejected."""
        path = tmp_path / "list.json"
        path.write_text(json.dumps(["hour"]), encoding="utf-8")
        with pytest.raises(LabelTableError, match="mapping"):
            load_label_table(path)

    def test_error_carries_path(self, tmp_path):
        """Test that validation errors record the offending file."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"lightyear": {"default": "x"}}), encoding="utf-8")
        with pytest.raises(LabelTableError) as exc_info:
            load_label_table(path)
        assert exc_info.value.path == str(path)


class TestLoadLabelTables:
    """Test loading every label table in a directory."""

    def test_keyed_by_stem(self, labels_directory):
        """Test that only label files are loaded, keyed by file stem."""
        tables = load_label_tables(labels_directory)
        assert sorted(tables) == ["de", "fr"]
        assert tables["de"][TimeUnit.HOUR].label_for(1) == "Stunde"
        assert tables["fr"][TimeUnit.HOUR].label_for(2) == "heures"

    def test_missing_directory(self, tmp_path):
        """Test that a missing directory raises LabelTableError."""
        with pytest.raises(LabelTableError, match="does not exist"):
            load_label_tables(tmp_path / "nowhere")

    def test_invalid_file_in_directory(self, labels_directory):
        """Test that one invalid file fails the whole load."""
        (labels_directory / "xx.json").write_text("{", encoding="utf-8")
        with pytest.raises(LabelTableError):
            load_label_tables(labels_directory)
