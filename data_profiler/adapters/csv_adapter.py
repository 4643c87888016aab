"""
CSV source adapter.

Comma-delimited text tokenized with csv.reader, so quoted fields may contain
commas and newlines. Blank rows are skipped. Header cells are trimmed (case is
kept; ``normalizedName`` lower-cases later), empty ones become ``column{n}``.
Data cells are trimmed and coerced.
"""

from __future__ import annotations

import csv
import io

from data_profiler.adapters.base import ParsedSource, has_extension
from data_profiler.domain.coercion import coerce_row
from data_profiler.domain.source import RawSource, decode_text
from data_profiler.domain.types import ParseOptions
from data_profiler.exceptions import EmptySourceError, InvalidFormatError


class CsvSourceAdapter:
    """Read ``.csv`` sources as one header row plus comma-separated records."""

    source_type = "csv"
    delimiter = ","

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, ".csv")

    def parse(self, source: RawSource, options: ParseOptions) -> ParsedSource:
        content = decode_text(source, options.encoding, self.source_type)
        reader = csv.reader(io.StringIO(content, newline=""), delimiter=self.delimiter)
        try:
            rows = [row for row in reader if any(cell.strip() for cell in row)]
        except csv.Error as e:
            raise InvalidFormatError(self.source_type, f"Invalid CSV format: {e}") from e

        if not rows:
            raise EmptySourceError(self.source_type, "CSV file must contain at least one line")

        headers = tuple(
            cell.strip() or f"column{i + 1}" for i, cell in enumerate(rows[0])
        )
        records = [coerce_row([cell.strip() for cell in row], headers) for row in rows[1:]]
        return ParsedSource(self.source_type, headers, records)
