"""Unit labels used when rendering durations as text.

Every canonical unit has a default label ("hours"), a compact label ("h") and
optional per-count overrides ("hour" for a count of exactly 1). The built-in
table is English; translated or customised tables can be loaded from JSON or
YAML files and are merged over it unit by unit.

A label file maps unit identifiers to label descriptors::

    {
      "hour": {"default": "Stunden", "compact": "Std", "counts": {"1": "Stunde"}},
      "day": {"DEFAULT": "Tage", "1": "Tag"}
    }

The upper-case ``DEFAULT`` / ``COMPACT`` keys and bare numeric keys are
accepted as well, so both layouts above are equivalent.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from durafmt.core.exceptions import LabelTableError
from durafmt.core.units import TimeUnit

logger = logging.getLogger(__name__)

LABEL_FILE_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass(frozen=True)
class UnitLabel:
    """Textual forms of a single unit."""

    default: str
    compact: str
    counts: Mapping[int, str] = field(default_factory=dict)

    def label_for(self, count: int) -> str:
        """Return the override for this exact count, else the default label."""
        return self.counts.get(count, self.default)


LabelTable = Mapping[TimeUnit, UnitLabel]


def _english(plural: str, singular: str, compact: str) -> UnitLabel:
    return UnitLabel(default=plural, compact=compact, counts=MappingProxyType({1: singular}))


DEFAULT_LABELS: LabelTable = MappingProxyType(
    {
        TimeUnit.TERAYEAR: _english("terayears", "terayear", "tyr"),
        TimeUnit.GIGAYEAR: _english("gigayears", "gigayear", "gyr"),
        TimeUnit.MEGAYEAR: _english("megayears", "megayear", "myr"),
        TimeUnit.MILLENNIUM: _english("millennia", "millennium", "mil"),
        TimeUnit.CENTURY: _english("centuries", "century", "c"),
        TimeUnit.DECADE: _english("decades", "decade", "dec"),
        TimeUnit.YEAR: _english("years", "year", "y"),
        TimeUnit.MONTH: _english("months", "month", "mo"),
        TimeUnit.WEEK: _english("weeks", "week", "w"),
        TimeUnit.DAY: _english("days", "day", "d"),
        TimeUnit.HOUR: _english("hours", "hour", "h"),
        TimeUnit.MINUTE: _english("minutes", "minute", "m"),
        TimeUnit.SECOND: _english("seconds", "second", "s"),
        TimeUnit.MILLISECOND: _english("milliseconds", "millisecond", "ms"),
        TimeUnit.MICROSECOND: _english("microseconds", "microsecond", "μs"),
        TimeUnit.NANOSECOND: _english("nanoseconds", "nanosecond", "ns"),
    }
)


class UnitLabelOverride(BaseModel):
    """Validated label descriptor read from an external file.

    Missing fields fall back to the built-in label of the same unit.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    default: str | None = Field(default=None, min_length=1, description="Label for any count")
    compact: str | None = Field(default=None, min_length=1, description="Abbreviated label")
    counts: dict[int, str] = Field(default_factory=dict, description="Labels for exact counts")

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Accept ``DEFAULT``/``COMPACT`` keys and bare numeric count keys."""
        if not isinstance(data, dict):
            return data

        normalized: dict[str, Any] = {}
        raw_counts = data.get("counts")
        if raw_counts is not None and not isinstance(raw_counts, dict):
            normalized["counts"] = raw_counts
        counts: dict[Any, Any] = dict(raw_counts) if isinstance(raw_counts, dict) else {}
        for key, value in data.items():
            key_str = str(key)
            if key_str == "counts":
                continue
            if key_str.lstrip("-").isdigit():
                counts[key_str] = value
            else:
                normalized[key_str.lower()] = value
        if counts:
            normalized["counts"] = counts
        return normalized

    def merge(self, base: UnitLabel) -> UnitLabel:
        """Overlay this override on ``base``."""
        return UnitLabel(
            default=self.default or base.default,
            compact=self.compact or base.compact,
            counts=MappingProxyType({**base.counts, **self.counts}) if self.counts else base.counts,
        )


def build_label_table(
    overrides: Mapping[TimeUnit | str, UnitLabel | Mapping[str, Any]] | None = None,
    base: LabelTable = DEFAULT_LABELS,
) -> LabelTable:
    """Merge label overrides over a base table.

    Args:
        overrides: Mapping from unit identifier to a UnitLabel (used as is)
            or a raw descriptor mapping (validated and merged)
        base: Table supplying labels for units not overridden

    Returns:
        Read-only label table covering every canonical unit

    Raises:
        LabelTableError: If a unit identifier is unknown or a descriptor is invalid
    """
    table: dict[TimeUnit, UnitLabel] = dict(base)
    for key, value in (overrides or {}).items():
        try:
            unit = TimeUnit(key)
        except ValueError:
            raise LabelTableError(
                f"Unknown unit '{key}' in label table",
                details=f"Expected one of: {', '.join(u.value for u in TimeUnit)}",
            ) from None

        if isinstance(value, UnitLabel):
            table[unit] = value
            continue

        try:
            override = UnitLabelOverride.model_validate(value)
        except ValidationError as e:
            raise LabelTableError(f"Invalid labels for unit '{unit.value}'", details=str(e)) from e
        table[unit] = override.merge(table[unit])

    return MappingProxyType(table)


def _read_label_file(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix not in LABEL_FILE_SUFFIXES:
        raise LabelTableError(
            f"Unsupported label file type '{suffix}'",
            path=path,
            details=f"Expected one of: {', '.join(LABEL_FILE_SUFFIXES)}",
        )

    try:
        with open(path, encoding="utf-8") as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except FileNotFoundError:
        raise LabelTableError(f"Label file '{path}' not found", path=path) from None
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise LabelTableError(f"Label file '{path}' is malformed", path=path, details=str(e)) from e


def load_label_table(path: Path | str, base: LabelTable = DEFAULT_LABELS) -> LabelTable:
    """Load a label table from a JSON or YAML file.

    Units absent from the file keep the labels of ``base``.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file
        base: Table supplying labels for units not in the file

    Returns:
        Read-only label table covering every canonical unit

    Raises:
        LabelTableError: If the file is missing, malformed or invalid
    """
    path = Path(path)
    data = _read_label_file(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LabelTableError(
            f"Label file '{path}' must contain a mapping of unit identifiers",
            path=path,
            details=f"Got {type(data).__name__}",
        )

    logger.debug(f"Loading {len(data)} unit label(s) from {path}")
    try:
        return build_label_table(data, base=base)
    except LabelTableError as e:
        e.path = str(path)
        raise


def load_label_tables(directory: Path | str, base: LabelTable = DEFAULT_LABELS) -> dict[str, LabelTable]:
    """Load every label file in a directory, keyed by file stem.

    Subdirectories and files with other extensions are skipped, so a
    ``languages/`` folder holding ``en.json`` and ``de.yaml`` yields the keys
    ``"en"`` and ``"de"``.

    Raises:
        LabelTableError: If the directory does not exist or a file is invalid
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise LabelTableError(f"Label directory '{directory}' does not exist", path=directory)

    tables: dict[str, LabelTable] = {}
    for entry in sorted(directory.iterdir()):
        if entry.is_dir() or entry.suffix.lower() not in LABEL_FILE_SUFFIXES:
            continue
        tables[entry.stem] = load_label_table(entry, base=base)

    logger.info(f"Loaded {len(tables)} label table(s) from {directory}")
    return tables
