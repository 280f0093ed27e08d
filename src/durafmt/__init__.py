__version__ = "0.1.0"

from durafmt.core.duration import Duration
from durafmt.core.exceptions import (
    DurationError,
    InvalidDurationError,
    InvalidPatternError,
    LabelTableError,
)
from durafmt.core.formatter import (
    DurationFormatter,
    FormatOptions,
    RenderMode,
    Separators,
    decompose,
)
from durafmt.core.labels import DEFAULT_LABELS, UnitLabel, load_label_table, load_label_tables
from durafmt.core.parser import parse
from durafmt.core.units import TimeUnit

__all__ = [
    "DEFAULT_LABELS",
    "Duration",
    "DurationError",
    "DurationFormatter",
    "FormatOptions",
    "InvalidDurationError",
    "InvalidPatternError",
    "LabelTableError",
    "RenderMode",
    "Separators",
    "TimeUnit",
    "UnitLabel",
    "__version__",
    "decompose",
    "load_label_table",
    "load_label_tables",
    "parse",
]
