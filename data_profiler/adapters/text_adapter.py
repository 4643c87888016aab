"""
Plain-text source adapter: delimited and fixed-width layouts.

Delimited (default): the first non-blank line is the header row; the delimiter
is the explicit ``delimiter`` option, else detected from the header line when
``detect_delimiter`` is set, else tab.

Fixed-width (``fixed_widths`` option): each column is a constant character
span. The first line is a header only if it contains a letter and does not
start with a digit; otherwise ``column1..N`` are synthesized.

``parse_stream`` consumes the payload as async byte chunks, decoding
incrementally, and then runs the same logic as ``parse``.
"""

from __future__ import annotations

import re
from itertools import accumulate
from typing import AsyncIterable, Sequence

from data_profiler.adapters.base import ParsedSource, has_extension
from data_profiler.domain.coercion import coerce_cell, coerce_row
from data_profiler.domain.source import RawSource, StreamDecoder, decode_text
from data_profiler.domain.types import CellValue, ParseOptions
from data_profiler.exceptions import EmptySourceError
from data_profiler.logging_config import get_logger

logger = get_logger("adapters.text")

# Priority order; ties go to the earliest candidate
DELIMITER_CANDIDATES: tuple[str, ...] = ("|", "\t", ";", ",")
DEFAULT_DELIMITER = "\t"

_LETTER = re.compile(r"[a-zA-Z]")
_LEADING_DIGIT = re.compile(r"\s*[0-9]")


def split_lines(content: str) -> list[str]:
    """Non-blank lines with any trailing carriage return removed."""
    return [line.rstrip("\r") for line in content.split("\n") if line.strip()]


def detect_delimiter(first_line: str) -> str:
    """Pick the candidate occurring most often in the header line; tab if none."""
    line = first_line.rstrip("\r\n")
    best, best_score = DEFAULT_DELIMITER, 0
    for candidate in DELIMITER_CANDIDATES:
        fields = line.split(candidate)
        score = len(fields) - 1 if len(fields) > 1 else 0
        if score > best_score:
            best, best_score = candidate, score
    return best


def choose_delimiter(first_line: str, options: ParseOptions) -> str:
    if options.delimiter:
        return options.delimiter
    if options.detect_delimiter:
        return detect_delimiter(first_line)
    return DEFAULT_DELIMITER


def parse_delimited(
    lines: Sequence[str], delimiter: str
) -> tuple[tuple[str, ...], list[list[CellValue]]]:
    headers = tuple(
        cell.strip().lower() or f"column{i + 1}"
        for i, cell in enumerate(lines[0].split(delimiter))
    )
    records = [
        coerce_row([cell.strip() for cell in line.split(delimiter)], headers)
        for line in lines[1:]
    ]
    return headers, records


def parse_fixed_width(
    lines: Sequence[str], widths: Sequence[int]
) -> tuple[tuple[str, ...], list[list[CellValue]]]:
    spans = list(zip(accumulate(widths, initial=0), widths))
    total_width = sum(widths)

    first = lines[0].rstrip()
    has_header = bool(_LETTER.search(first[:total_width])) and not _LEADING_DIGIT.match(first)

    if has_header:
        headers = tuple(
            first[start:start + width].strip().lower() or f"column{n + 1}"
            for n, (start, width) in enumerate(spans)
        )
        data_lines = lines[1:]
    else:
        headers = tuple(f"column{n + 1}" for n in range(len(widths)))
        data_lines = lines

    records: list[list[CellValue]] = []
    for raw in data_lines:
        line = raw.rstrip()
        if not line:
            continue
        records.append([
            coerce_cell(line[start:start + width].strip(), headers[j])
            for j, (start, width) in enumerate(spans)
        ])
    return headers, records


class TxtSourceAdapter:
    """Read ``.txt`` sources as delimited or fixed-width text."""

    source_type = "txt"

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, ".txt")

    def parse(self, source: RawSource, options: ParseOptions) -> ParsedSource:
        content = decode_text(source, options.encoding, self.source_type)
        return self.parse_text(content, options)

    async def parse_stream(
        self, chunks: AsyncIterable[bytes], options: ParseOptions
    ) -> ParsedSource:
        """Consume pushed byte chunks until end-of-data, then parse.

        A chunk that cannot be decoded fails the call immediately.
        """
        decoder = StreamDecoder(options.encoding, self.source_type)
        parts: list[str] = []
        async for chunk in chunks:
            parts.append(decoder.feed(chunk))
        parts.append(decoder.finish())
        return self.parse_text("".join(parts), options)

    def parse_text(self, content: str, options: ParseOptions) -> ParsedSource:
        lines = split_lines(content)
        if not lines:
            raise EmptySourceError(self.source_type, "TXT file must contain at least one line")

        if options.fixed_widths:
            headers, records = parse_fixed_width(lines, options.fixed_widths)
            logger.debug("fixed-width layout", extra={"widths": list(options.fixed_widths)})
        else:
            delimiter = choose_delimiter(lines[0], options)
            headers, records = parse_delimited(lines, delimiter)
            logger.debug("delimited layout", extra={"delimiter": delimiter})

        return ParsedSource(self.source_type, headers, records)
