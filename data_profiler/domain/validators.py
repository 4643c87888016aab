"""
Validators for options, header rows, and record matrices.

Three independent checks, each returning a list of ValidationError. They are
composed by ``collect_errors``; ``ensure_valid`` raises a single aggregated
ValidationFailedError when anything is wrong.

Architecture: data_profiler/domain. ZERO I/O.
"""

from __future__ import annotations

from typing import Any, Sequence

from data_profiler.domain.source import SUPPORTED_ENCODINGS
from data_profiler.domain.types import ParseOptions, ValidationError
from data_profiler.exceptions import ValidationFailedError


# -----------------------------------------------------------------------------
# Options
# -----------------------------------------------------------------------------


def validate_options(options: ParseOptions) -> list[ValidationError]:
    """Validate sample_size, fixed_widths, and encoding."""
    errors: list[ValidationError] = []

    sample_size = options.sample_size
    if sample_size is not None:
        if isinstance(sample_size, bool) or not isinstance(sample_size, int):
            errors.append(
                ValidationError(
                    code="INVALID_SAMPLE_SIZE",
                    message="Sample size must be an integer",
                    field="sampleSize",
                )
            )
        elif sample_size <= 0:
            errors.append(
                ValidationError(
                    code="INVALID_SAMPLE_SIZE",
                    message="Sample size must be greater than 0",
                    field="sampleSize",
                )
            )

    errors.extend(validate_fixed_widths(options.fixed_widths))

    encoding = options.encoding
    if encoding is not None:
        if not isinstance(encoding, str) or encoding.lower() not in SUPPORTED_ENCODINGS:
            errors.append(
                ValidationError(
                    code="INVALID_ENCODING",
                    message=f"Invalid encoding. Supported encodings: {', '.join(SUPPORTED_ENCODINGS)}",
                    field="encoding",
                )
            )

    return errors


def validate_fixed_widths(widths: Any) -> list[ValidationError]:
    """Fixed widths, when given, must be a non-empty run of positive integers."""
    if widths is None:
        return []
    valid = (
        isinstance(widths, (list, tuple))
        and len(widths) > 0
        and all(isinstance(w, int) and not isinstance(w, bool) and w > 0 for w in widths)
    )
    if valid:
        return []
    return [
        ValidationError(
            code="INVALID_FIXED_WIDTHS",
            message="Fixed widths must be positive integers",
            field="fixedWidths",
        )
    ]


# -----------------------------------------------------------------------------
# Headers
# -----------------------------------------------------------------------------


def validate_headers(headers: Sequence[str]) -> list[ValidationError]:
    """Headers must be non-empty, unique after case-folding, and non-blank."""
    errors: list[ValidationError] = []

    if len(headers) == 0:
        errors.append(
            ValidationError(
                code="NO_HEADERS",
                message="File must contain at least one header",
                field="headers",
            )
        )

    seen: set[str] = set()
    duplicates: list[str] = []
    for header in headers:
        folded = str(header).casefold()
        if folded in seen and folded not in duplicates:
            duplicates.append(folded)
        seen.add(folded)
    if duplicates:
        errors.append(
            ValidationError(
                code="DUPLICATE_HEADERS",
                message=f"Duplicate headers found: {', '.join(duplicates)}",
                field="headers",
            )
        )

    for index, header in enumerate(headers):
        if header is None or not str(header).strip():
            errors.append(
                ValidationError(
                    code="EMPTY_HEADER",
                    message="Empty or whitespace-only header found",
                    field=f"header[{index}]",
                )
            )

    return errors


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


def validate_records(records: Sequence[Sequence[Any]]) -> list[ValidationError]:
    """Records must be non-empty and all as wide as the first row."""
    if len(records) == 0:
        return [
            ValidationError(
                code="NO_RECORDS",
                message="File must contain at least one record",
                field="records",
            )
        ]

    errors: list[ValidationError] = []
    expected = len(records[0])
    for index, record in enumerate(records):
        if len(record) != expected:
            errors.append(
                ValidationError(
                    code="RECORD_WIDTH_MISMATCH",
                    message=f"Record has {len(record)} fields, expected {expected}",
                    field=f"record[{index}]",
                )
            )
    return errors


# -----------------------------------------------------------------------------
# Composition
# -----------------------------------------------------------------------------


def collect_errors(
    options: ParseOptions,
    headers: Sequence[str],
    records: Sequence[Sequence[Any]],
) -> list[ValidationError]:
    """Concatenate option, header, and record problems in that order."""
    return [
        *validate_options(options),
        *validate_headers(headers),
        *validate_records(records),
    ]


def ensure_valid(
    options: ParseOptions,
    headers: Sequence[str],
    records: Sequence[Sequence[Any]],
) -> None:
    """Raise ValidationFailedError listing every problem, if any."""
    errors = collect_errors(options, headers, records)
    if errors:
        raise ValidationFailedError(errors)
