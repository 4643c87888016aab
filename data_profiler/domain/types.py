"""
data_profiler.domain.types -- Pure frozen dataclasses for the profiler.

ZERO I/O. Options, validation problems, per-column field metadata, and the
assembled analysis result. ``AnalysisResult.to_dict()`` renders the wire shape
(camelCase keys, optional keys omitted when absent).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Union

CellValue = Union[str, int, float, bool, None]


# =============================================================================
# Validation problem DTO
# =============================================================================


@dataclass(frozen=True)
class ValidationError:
    """A single validation problem: machine-readable code, field path, message."""

    code: str
    message: str
    field: str


# =============================================================================
# Options
# =============================================================================

# camelCase names accepted by ParseOptions.from_mapping
_OPTION_ALIASES = {
    "detectPatterns": "detect_patterns",
    "checkUniqueness": "check_uniqueness",
    "sampleSize": "sample_size",
    "fixedWidths": "fixed_widths",
    "detectDelimiter": "detect_delimiter",
    "fileName": "file_name",
}


@dataclass(frozen=True)
class ParseOptions:
    """Recognized profiling options.

    Values are stored exactly as given; ``validate_options`` judges them, so an
    invalid ``sample_size`` or ``encoding`` surfaces as a validation error
    rather than a construction failure.
    """

    detect_patterns: bool = False
    check_uniqueness: bool = False
    sample_size: Any = None
    encoding: str | None = None
    delimiter: str | None = None
    fixed_widths: tuple[int, ...] | None = None
    detect_delimiter: bool = False
    file_name: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ParseOptions:
        """Build options from a dict using snake_case or camelCase keys.

        Unknown keys raise ``KeyError``; ``None`` values fall back to defaults.
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise KeyError(f"Unknown option: {key!r}")
            if value is None:
                continue
            if name == "fixed_widths":
                if not isinstance(value, (list, tuple)):
                    raise ValueError(f"{key} must be a list of column widths, got {value!r}")
                value = tuple(value)
            kwargs[name] = value
        return cls(**kwargs)

    def merged_with(self, overrides: Mapping[str, Any]) -> ParseOptions:
        """Return a copy with non-None ``overrides`` applied on top."""
        base = {name: getattr(self, name) for name in self.__dataclass_fields__}
        base.update({k: v for k, v in overrides.items() if v is not None})
        return ParseOptions.from_mapping(base)


# =============================================================================
# Field metadata and analysis result
# =============================================================================


@dataclass(frozen=True)
class FieldMetadata:
    """Inferred description of one column, in header order."""

    normalized_name: str
    original_header: str
    data_type: str
    length: int
    pattern: str | None = None
    is_unique: bool | None = None
    examples: tuple[CellValue, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "normalizedName": self.normalized_name,
            "originalHeader": self.original_header,
            "dataType": self.data_type,
            "length": self.length,
        }
        if self.pattern is not None:
            out["pattern"] = self.pattern
        if self.is_unique is not None:
            out["isUnique"] = self.is_unique
        out["examples"] = list(self.examples)
        return out


@dataclass(frozen=True)
class AnalysisMetadata:
    """Run metadata attached to every analysis result."""

    date_analyzed: datetime
    version: str
    file_name: str = "Unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileName": self.file_name,
            "dateAnalyzed": self.date_analyzed.isoformat(),
            "version": self.version,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Profile of one source: record count, per-column fields, run metadata."""

    source_type: str
    total_records: int
    metadata: AnalysisMetadata
    fields: tuple[FieldMetadata, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceType": self.source_type,
            "totalRecords": self.total_records,
            "fields": [f.to_dict() for f in self.fields],
            "metadata": self.metadata.to_dict(),
        }
