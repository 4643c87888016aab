"""
Typed exception hierarchy for the data profiler.

Every failure a profiling call can produce has its own class with a
machine-readable ``code`` class attribute and structured attributes, so
callers catch by type and report by code instead of parsing messages.

    ProfilerError (base)
    |
    +-- SourceError
    |   +-- InvalidFormatError
    |   +-- EmptySourceError
    |   +-- MissingRecordCollectionError
    |   +-- UnsupportedFormatError
    |
    +-- ValidationFailedError

Code                        | When Raised
----------------------------|----------------------------------------------
INVALID_FORMAT              | Malformed JSON/XML/workbook payload, bad bytes
EMPTY_SOURCE                | Zero lines / records / data rows
MISSING_RECORD_COLLECTION   | XML root has no repeating element
UNSUPPORTED_FORMAT          | No adapter claims the file name
VALIDATION_FAILED           | Options, headers, or record matrix problems

All errors are terminal for the current call: no partial results and no
retries. ValidationFailedError always aggregates every problem found.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from data_profiler.domain.types import ValidationError


class ProfilerError(Exception):
    """Base exception for all data profiler errors."""

    code: str = "PROFILER_ERROR"


# Source-related exceptions


class SourceError(ProfilerError):
    """Base exception for problems with the raw source itself."""

    code: str = "SOURCE_ERROR"


class InvalidFormatError(SourceError):
    """Payload could not be decoded as the declared format."""

    code: str = "INVALID_FORMAT"

    def __init__(self, source_type: str, message: str):
        self.source_type = source_type
        super().__init__(message)


class EmptySourceError(SourceError):
    """Source decoded cleanly but holds no lines, records, or data rows."""

    code: str = "EMPTY_SOURCE"

    def __init__(self, source_type: str, message: str):
        self.source_type = source_type
        super().__init__(message)


class MissingRecordCollectionError(SourceError):
    """XML document has no repeating element under its root."""

    code: str = "MISSING_RECORD_COLLECTION"

    def __init__(self, root_tag: str | None = None):
        self.root_tag = root_tag
        super().__init__("XML file must contain a repeating element for records")


class UnsupportedFormatError(SourceError):
    """No registered adapter supports the given file name or source type."""

    code: str = "UNSUPPORTED_FORMAT"

    def __init__(self, file_name: str | None):
        self.file_name = file_name
        super().__init__(f"Unsupported file format: {file_name or 'Unknown'}")


# Validation exceptions


class ValidationFailedError(ProfilerError):
    """One or more option, header, or record problems were found."""

    code: str = "VALIDATION_FAILED"

    def __init__(self, errors: Sequence[ValidationError]):
        self.errors = tuple(errors)
        lines = [f"- {e.field}: {e.message}" for e in self.errors]
        super().__init__("Validation failed:\n" + "\n".join(lines))
