"""
Field inference: per-column metadata from a header row and record matrix.

Pure functions over explicit arguments. ``infer_fields`` is the engine entry
point; the helpers are public so callers and tests can use them directly.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Sequence

from data_profiler.domain.coercion import render_value
from data_profiler.domain.types import CellValue, FieldMetadata, ParseOptions

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_NUMERIC_TEXT = re.compile(r"\s*[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\s*")
_PHONE = re.compile(r"[0-9]{3}-[0-9]{3}-[0-9]{4}")
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("numeric", re.compile(r"[0-9]+")),
    ("alpha", re.compile(r"[A-Za-z]+")),
    ("alphanumeric", re.compile(r"[A-Za-z0-9]+")),
    ("alphanumeric+space", re.compile(r"[A-Za-z0-9 \t\r\n\f\v]+")),
)

# Dash-separated shapes accepted besides ISO 8601
_DASHED_DATE_FORMATS = ("%m-%d-%Y", "%d-%m-%Y", "%Y-%m-%dT%H:%M:%S.%fZ")

_PATTERN_SAMPLE = 10
_EXAMPLE_COUNT = 3
_LONG_STRING = 100
_NULL_SENTINEL = object()


def normalize_field_name(header: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to ``_``, strip edge underscores."""
    return _NON_ALNUM_RUN.sub("_", str(header).lower()).strip("_")


def _parses_as_date(text: str) -> bool:
    try:
        datetime.fromisoformat(text.strip())
        return True
    except ValueError:
        pass
    for fmt in _DASHED_DATE_FORMATS:
        try:
            datetime.strptime(text.strip(), fmt)
            return True
        except ValueError:
            continue
    return False


def _is_numeric(value: Any, text: str) -> bool:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value  # NaN is not a number here
    if isinstance(value, str):
        return _NUMERIC_TEXT.fullmatch(text) is not None
    return False


def detect_data_type(value: Any) -> str:
    """Semantic type of a single (first sampled) value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    text = render_value(value)
    if "-" in text and _parses_as_date(text):
        return "date"
    if _is_numeric(value, text):
        return "number.float" if "." in text else "number.integer"
    if isinstance(value, str):
        if _PHONE.fullmatch(value):
            return "string.phone"
        if _EMAIL.fullmatch(value):
            return "string.email"
        if len(value) > _LONG_STRING:
            return "string.long"
        return "string"
    return "unknown"


def _classify(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    for name, pattern in _PATTERNS:
        if pattern.fullmatch(value):
            return name
    return None


def detect_pattern(values: Sequence[Any]) -> str | None:
    """Shared shape of the first values, or None when they disagree."""
    if not values:
        return None
    patterns = [_classify(v) for v in values[:_PATTERN_SAMPLE]]
    first = patterns[0]
    if first is not None and all(p == first for p in patterns):
        return first
    return None


def calculate_field_length(values: Sequence[Any]) -> int:
    """Longest rendered value; None counts as 0."""
    return max((len(render_value(v)) for v in values), default=0)


def is_field_unique(values: Sequence[Any]) -> bool:
    """True iff no two values share a rendering (all Nones collide)."""
    distinct = {_NULL_SENTINEL if v is None else render_value(v) for v in values}
    return len(distinct) == len(values)


def _column(records: Sequence[Sequence[CellValue]], index: int) -> list[CellValue]:
    return [row[index] if index < len(row) else None for row in records]


def infer_field(
    header: str, values: Sequence[CellValue], options: ParseOptions
) -> FieldMetadata:
    normalized = normalize_field_name(header)
    if "id" in normalized:
        data_type = "string"
    else:
        data_type = detect_data_type(values[0] if values else None)

    return FieldMetadata(
        normalized_name=normalized,
        original_header=str(header),
        data_type=data_type,
        length=calculate_field_length(values),
        pattern=detect_pattern(values) if options.detect_patterns else None,
        is_unique=is_field_unique(values) if options.check_uniqueness else None,
        examples=tuple(v for v in values if v is not None)[:_EXAMPLE_COUNT],
    )


def infer_fields(
    headers: Sequence[str],
    records: Sequence[Sequence[CellValue]],
    options: ParseOptions,
) -> tuple[FieldMetadata, ...]:
    """One FieldMetadata per header, in header order."""
    return tuple(
        infer_field(header, _column(records, i), options)
        for i, header in enumerate(headers)
    )
