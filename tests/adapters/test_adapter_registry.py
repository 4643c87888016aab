"""Registry order and protocol conformance of the built-in adapters."""

import pytest

from data_profiler.adapters import SourceAdapter, default_adapters


class TestDefaultAdapters:
    def test_order(self):
        assert [a.source_type for a in default_adapters()] == [
            "csv", "excel", "json", "xml", "txt",
        ]

    @pytest.mark.parametrize("adapter", default_adapters(), ids=lambda a: a.source_type)
    def test_conforms_to_protocol(self, adapter):
        assert isinstance(adapter, SourceAdapter)

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("a.csv", "csv"),
            ("a.xlsx", "excel"),
            ("a.xls", "excel"),
            ("a.json", "json"),
            ("a.xml", "xml"),
            ("a.txt", "txt"),
            ("A.TXT", "txt"),
        ],
    )
    def test_each_extension_claimed_by_one_adapter(self, file_name, expected):
        claimed = [a.source_type for a in default_adapters() if a.supports(file_name)]
        assert claimed == [expected]

    def test_unknown_extension_unclaimed(self):
        assert not any(a.supports("report.pdf") for a in default_adapters())
