"""
Spreadsheet source adapter for Excel workbooks.

Reads the first worksheet. ``.xlsx``/``.xlsm`` payloads go through openpyxl,
legacy ``.xls`` (OLE2 compound documents, recognized by magic bytes) through
xlrd. The first non-blank row is the header row, remaining non-blank rows are
records.

Cell normalization: strings stripped (blank -> None), integral floats -> int,
date cells -> datetime, time/duration cells -> their string form. Trailing
empty header cells are dropped and every row is padded or cut to the header
width.
"""

from __future__ import annotations

import io
import zipfile
from datetime import time, timedelta
from typing import Any

import openpyxl
import xlrd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError

from data_profiler.adapters.base import ParsedSource, has_extension
from data_profiler.domain.coercion import coerce_row, render_value
from data_profiler.domain.source import RawSource
from data_profiler.domain.types import ParseOptions
from data_profiler.exceptions import EmptySourceError, InvalidFormatError
from data_profiler.logging_config import get_logger

logger = get_logger("adapters.xlsx")

_OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def _cell_value(value: Any) -> Any:
    """Normalize a raw cell value from either reader."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (time, timedelta)):
        return str(value) if isinstance(value, timedelta) else value.isoformat()
    return value


def _read_openpyxl(data: bytes) -> list[list[Any]]:
    wb = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        sheet = wb.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        wb.close()


def _xlrd_value(book: Any, cell: Any) -> Any:
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, book.datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return None
    return cell.value


def _read_xlrd(data: bytes) -> list[list[Any]]:
    book = xlrd.open_workbook(file_contents=data)
    sheet = book.sheet_by_index(0)
    return [
        [_xlrd_value(book, sheet.cell(r, c)) for c in range(sheet.ncols)]
        for r in range(sheet.nrows)
    ]


def read_sheet_rows(data: bytes) -> list[list[Any]]:
    """Raw rows of the first worksheet, choosing the reader by magic bytes."""
    if data.startswith(_OLE2_MAGIC):
        return _read_xlrd(data)
    return _read_openpyxl(data)


class XlsxSourceAdapter:
    """Read Excel workbooks: first sheet, first row as header."""

    source_type = "excel"

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, ".xlsx", ".xls", ".xlsm")

    def parse(self, source: RawSource, options: ParseOptions) -> ParsedSource:
        try:
            raw_rows = read_sheet_rows(source.data)
        except (
            zipfile.BadZipFile,
            InvalidFileException,
            xlrd.XLRDError,
            CompDocError,
            KeyError,  # zip without workbook parts
            ValueError,
            SyntaxError,  # malformed sheet XML
        ) as e:
            raise InvalidFormatError(self.source_type, f"Invalid Excel workbook: {e}") from e

        rows = [[_cell_value(v) for v in row] for row in raw_rows]
        rows = [row for row in rows if any(v is not None for v in row)]
        if len(rows) < 2:
            raise EmptySourceError(
                self.source_type,
                "Excel file must contain at least headers and one row of data",
            )

        header_cells = rows[0]
        while header_cells and header_cells[-1] is None:
            header_cells = header_cells[:-1]
        headers = tuple(render_value(v) for v in header_cells)
        width = len(headers)
        logger.debug("sheet read", extra={"rows": len(rows) - 1, "columns": width})

        records = [
            coerce_row((row + [None] * width)[:width], headers) for row in rows[1:]
        ]
        return ParsedSource(self.source_type, headers, records)
