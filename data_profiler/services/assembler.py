"""
Result assembly: sampling and the final AnalysisResult.

Stateless. The analysis timestamp is passed in by the caller (from its Clock),
so assembly is a pure function of its arguments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence, TypeVar

from data_profiler import __version__
from data_profiler.domain.types import (
    AnalysisMetadata,
    AnalysisResult,
    FieldMetadata,
    ParseOptions,
)

T = TypeVar("T")

UNKNOWN_FILE_NAME = "Unknown"


def sample_records(records: Sequence[T], sample_size: object) -> Sequence[T]:
    """First ``sample_size`` rows; all rows unless sample_size is a positive int."""
    if isinstance(sample_size, int) and not isinstance(sample_size, bool) and sample_size > 0:
        return records[:sample_size]
    return records


def assemble_result(
    *,
    source_type: str,
    total_records: int,
    fields: Sequence[FieldMetadata],
    options: ParseOptions,
    analyzed_at: datetime,
    file_name: str | None = None,
) -> AnalysisResult:
    """Combine source tag, unsampled record count, fields, and run metadata."""
    return AnalysisResult(
        source_type=source_type,
        total_records=total_records,
        fields=tuple(fields),
        metadata=AnalysisMetadata(
            file_name=options.file_name or file_name or UNKNOWN_FILE_NAME,
            date_analyzed=analyzed_at,
            version=__version__,
        ),
    )
