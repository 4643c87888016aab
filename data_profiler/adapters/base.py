"""
Source adapter protocol and parsed-matrix DTO.

Contract:
    SourceAdapter.supports() claims a file by case-insensitive extension.
    SourceAdapter.parse() normalizes a RawSource into a ParsedSource: one
    header row plus a record matrix with every data cell already coerced.

Adapters do not validate, sample, or infer; the analysis service does that.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from data_profiler.domain.source import RawSource
from data_profiler.domain.types import CellValue, ParseOptions


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for turning one source format into header + record matrix."""

    source_type: str

    def supports(self, file_name: str) -> bool:
        """True iff this adapter handles the file name's extension."""
        ...

    def parse(self, source: RawSource, options: ParseOptions) -> "ParsedSource":
        """Normalize the whole source into matrix form."""
        ...


@dataclass(frozen=True)
class ParsedSource:
    """Result of parsing a source: header row and aligned record matrix."""

    source_type: str
    headers: tuple[str, ...]
    records: list[list[CellValue]]  # Transient; do not retain across calls

    @property
    def row_count(self) -> int:
        return len(self.records)


def has_extension(file_name: str, *extensions: str) -> bool:
    return file_name.lower().endswith(extensions)
