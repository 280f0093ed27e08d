"""Settings for the durafmt CLI.

Values are resolved in this order, highest first:

1. Command-line options (applied by the commands on top of these settings)
2. ``DURAFMT_*`` environment variables, e.g. ``DURAFMT_FORMAT__PRECISION=3``
3. A YAML file given with ``--config`` or found in a default location
4. Built-in defaults

Example ``durafmt.yaml``::

    format:
      mode: elegant
      precision: 3
    labels:
      directory: ~/.config/durafmt/languages
      language: de
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from durafmt.core.exceptions import LabelTableError
from durafmt.core.formatter import DEFAULT_PRECISION, FormatOptions, RenderMode, Separators
from durafmt.core.labels import DEFAULT_LABELS, LabelTable, load_label_table, load_label_tables


class FormatDefaults(BaseSettings):
    """Default settings for rendering durations."""

    model_config = SettingsConfigDict(env_prefix="DURAFMT_FORMAT_")

    mode: RenderMode = Field(default=RenderMode.VERBOSE, description="Default rendering mode")
    precision: int = Field(
        default=DEFAULT_PRECISION,
        gt=0,
        description="Maximum number of units in verbose and elegant output",
    )
    left_separator: str = Field(default=" ", description="Separator between a count and its label")
    right_separator: str = Field(default=" ", description="Separator between verbose entries")
    compact_separator: str = Field(default=" ", description="Separator between compact entries")

    def to_options(self) -> FormatOptions:
        """Build the formatter option set."""
        return FormatOptions(
            precision=self.precision,
            separators=Separators(left=self.left_separator, right=self.right_separator),
            compact_separator=self.compact_separator,
        )


class LabelSettings(BaseSettings):
    """Where to find translated or customised unit labels."""

    model_config = SettingsConfigDict(env_prefix="DURAFMT_LABELS_")

    file: Path | None = Field(default=None, description="JSON or YAML label file")
    directory: Path | None = Field(
        default=None,
        description="Directory of label files named by language (en.json, de.yaml, ...)",
    )
    language: str | None = Field(default=None, description="Language to pick from the label directory")

    @field_validator("file", "directory")
    @classmethod
    def expand_home(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None

    def load(self) -> LabelTable:
        """Load the configured label table.

        A label file takes precedence over a directory; with neither, the
        built-in English labels are returned.

        Raises:
            LabelTableError: If the file or directory cannot be loaded, or the
                language has no file in the directory
        """
        if self.file is not None:
            return load_label_table(self.file)
        if self.directory is not None and self.language:
            tables = load_label_tables(self.directory)
            if self.language not in tables:
                available = ", ".join(sorted(tables)) or "none"
                raise LabelTableError(
                    f"Language '{self.language}' not found in label directory",
                    path=self.directory,
                    details=f"Available languages: {available}",
                )
            return tables[self.language]
        return DEFAULT_LABELS


DEFAULT_CONFIG_LOCATIONS: tuple[Path, ...] = (
    Path("durafmt.yaml"),
    Path("durafmt.yml"),
    Path.home() / ".durafmt.yaml",
    Path.home() / ".config" / "durafmt" / "config.yaml",
)


def find_config_file() -> Path | None:
    """Return the first existing default configuration file, if any."""
    return next((path for path in DEFAULT_CONFIG_LOCATIONS if path.exists()), None)


def _merge_missing(explicit: dict[str, Any], from_file: dict[str, Any]) -> dict[str, Any]:
    """Fill keys absent from ``explicit`` with values from the file, section by section."""
    merged = dict(explicit)
    for key, value in from_file.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge_missing(current, value)
        elif current is None:
            merged[key] = value
    return merged


class Settings(BaseSettings):
    """Application settings: formatting defaults and label sources."""

    model_config = SettingsConfigDict(
        env_prefix="DURAFMT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    format: FormatDefaults = Field(default_factory=FormatDefaults)
    labels: LabelSettings = Field(default_factory=LabelSettings)
    config_file: Path | None = Field(default=None, description="YAML file the settings were read from")

    @model_validator(mode="before")
    @classmethod
    def load_yaml_config(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Merge section variables and the YAML file under explicit and environment values.

        A section given as a mapping is validated without reading its own
        ``DURAFMT_FORMAT_*`` or ``DURAFMT_LABELS_*`` variables, so those are
        collected here first.
        """
        section_env = {
            name: values
            for name, section in (("format", FormatDefaults), ("labels", LabelSettings))
            if (values := section().model_dump(exclude_unset=True))
        }
        data = _merge_missing(data, section_env)

        config_file = data.get("config_file") or find_config_file()
        if config_file is None or not Path(config_file).exists():
            return data

        with open(config_file, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
        if not isinstance(yaml_config, dict):
            raise ValueError(f"Configuration file '{config_file}' must contain a mapping")

        merged = _merge_missing(data, yaml_config)
        merged["config_file"] = config_file
        return merged

    def format_options(self) -> FormatOptions:
        """Formatter options derived from the format defaults."""
        return self.format.to_options()


# Cached by get_settings; tests reset it between runs
_settings: Settings | None = None


def get_settings(config_file: Path | None = None, **overrides: Any) -> Settings:
    """Return the cached settings, rebuilding them when a file or overrides are given.

    Args:
        config_file: YAML configuration file to read instead of the default locations
        **overrides: Field values that take precedence over the file and environment
    """
    global _settings

    if _settings is None or config_file is not None or overrides:
        if config_file is not None:
            overrides["config_file"] = config_file
        _settings = Settings(**overrides)

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads file and environment."""
    global _settings
    _settings = None
