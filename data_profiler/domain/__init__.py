"""
data_profiler.domain -- Pure types, coercion, validation, and field inference.

ZERO I/O (the SystemClock aside).
"""

from data_profiler.domain.types import (
    AnalysisMetadata,
    AnalysisResult,
    CellValue,
    FieldMetadata,
    ParseOptions,
    ValidationError,
)

__all__ = [
    "AnalysisMetadata",
    "AnalysisResult",
    "CellValue",
    "FieldMetadata",
    "ParseOptions",
    "ValidationError",
]
