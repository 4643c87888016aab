"""Source adapters: one per format, each yielding header row + record matrix (no I/O)."""

from data_profiler.adapters.base import ParsedSource, SourceAdapter
from data_profiler.adapters.csv_adapter import CsvSourceAdapter
from data_profiler.adapters.json_adapter import JsonSourceAdapter
from data_profiler.adapters.text_adapter import TxtSourceAdapter
from data_profiler.adapters.xlsx_adapter import XlsxSourceAdapter
from data_profiler.adapters.xml_adapter import XmlSourceAdapter

__all__ = [
    "ParsedSource",
    "SourceAdapter",
    "CsvSourceAdapter",
    "JsonSourceAdapter",
    "TxtSourceAdapter",
    "XlsxSourceAdapter",
    "XmlSourceAdapter",
    "default_adapters",
]


def default_adapters() -> tuple[SourceAdapter, ...]:
    """The adapter registry, in the order file names are matched against it."""
    return (
        CsvSourceAdapter(),
        XlsxSourceAdapter(),
        JsonSourceAdapter(),
        XmlSourceAdapter(),
        TxtSourceAdapter(),
    )
