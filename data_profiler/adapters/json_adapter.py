"""
JSON source adapter.

Accepts a JSON array of objects, or a single object treated as a one-record
array. Headers are the first record's keys in document order; every record is
aligned to them, missing keys yielding None.
"""

from __future__ import annotations

import json
from typing import Any

from data_profiler.adapters.base import ParsedSource, has_extension
from data_profiler.domain.coercion import coerce_row
from data_profiler.domain.source import RawSource, decode_text
from data_profiler.domain.types import ParseOptions
from data_profiler.exceptions import EmptySourceError, InvalidFormatError


def _record_list(data: Any) -> list[Any]:
    return data if isinstance(data, list) else [data]


class JsonSourceAdapter:
    """Read ``.json`` sources as one row per object."""

    source_type = "json"

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, ".json")

    def parse(self, source: RawSource, options: ParseOptions) -> ParsedSource:
        content = decode_text(source, options.encoding, self.source_type)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidFormatError(self.source_type, "Invalid JSON format") from e

        records = _record_list(data)
        if not records:
            raise EmptySourceError(self.source_type, "JSON file must contain at least one record")
        if not all(isinstance(r, dict) for r in records):
            raise InvalidFormatError(self.source_type, "JSON records must be objects")

        headers = tuple(str(k) for k in records[0])
        keys = list(records[0])
        rows = [coerce_row([record.get(k) for k in keys], headers) for record in records]
        return ParsedSource(self.source_type, headers, rows)
