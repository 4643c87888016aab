"""Tests for the XML adapter."""

import xml.etree.ElementTree as ET

import pytest

from data_profiler.adapters.xml_adapter import (
    XmlSourceAdapter,
    collapse,
    element_to_tree,
    find_record_collection,
)
from data_profiler.domain.source import RawSource
from data_profiler.domain.types import ParseOptions
from data_profiler.exceptions import (
    InvalidFormatError,
    MissingRecordCollectionError,
)


CUSTOMERS = """<?xml version="1.0"?>
<customers>
  <customer id="001">
    <Name>John</Name>
    <Age>30</Age>
    <Email>john@example.com</Email>
  </customer>
  <customer id="002">
    <Name>Jane</Name>
    <Age>25.5</Age>
    <Email>jane@example.com</Email>
  </customer>
</customers>
"""


def _parse(text):
    return XmlSourceAdapter().parse(RawSource.of(text), ParseOptions())


class TestElementToTree:
    def test_leaf_becomes_text(self):
        assert element_to_tree(ET.fromstring("<a>hi</a>")) == "hi"

    def test_attributes_and_text_merged(self):
        tree = element_to_tree(ET.fromstring('<a kind="x">hi</a>'))
        assert tree == {"kind": "x", "_": "hi"}

    def test_children_grouped_in_lists(self):
        tree = element_to_tree(ET.fromstring("<r><i>1</i><i>2</i><j>3</j></r>"))
        assert tree == {"i": ["1", "2"], "j": ["3"]}

    def test_collapse_unwraps_single_element_lists(self):
        assert collapse(["x"]) == "x"
        assert collapse(["x", "y"]) == ["x", "y"]
        assert collapse("x") == "x"

    def test_find_record_collection_requires_a_list(self):
        with pytest.raises(MissingRecordCollectionError):
            find_record_collection({"a": "1"})


class TestXmlSourceAdapter:
    def test_records_from_repeating_element(self):
        parsed = _parse(CUSTOMERS)
        assert parsed.source_type == "xml"
        assert parsed.headers == ("id", "name", "age", "email")
        assert parsed.records == [
            ["001", "John", "30", "john@example.com"],
            ["002", "Jane", 25.5, "jane@example.com"],
        ]

    def test_missing_field_in_later_record_is_none(self):
        parsed = _parse("<r><i><a>x</a><b>y</b></i><i><a>z</a></i></r>")
        assert parsed.records[1] == ["z", None]

    def test_repeated_child_stays_a_list(self):
        parsed = _parse("<r><i><tag>a</tag><tag>b</tag></i><i><tag>c</tag></i></r>")
        assert parsed.records == [[["a", "b"]], ["c"]]

    def test_namespaces_stripped(self):
        parsed = _parse('<n:r xmlns:n="urn:x"><n:item><n:Name>A</n:Name></n:item></n:r>')
        assert parsed.headers == ("name",)
        assert parsed.records == [["A"]]

    def test_root_without_collection_fails(self):
        with pytest.raises(MissingRecordCollectionError) as exc_info:
            _parse("<root>just text</root>")
        assert exc_info.value.root_tag == "root"
        assert "repeating element" in str(exc_info.value)

    def test_root_with_only_attributes_fails(self):
        with pytest.raises(MissingRecordCollectionError):
            _parse('<root a="1"/>')

    def test_leaf_records_fail(self):
        with pytest.raises(InvalidFormatError):
            _parse("<r><i>1</i><i>2</i></r>")

    def test_malformed_document_fails(self):
        with pytest.raises(InvalidFormatError, match="Invalid XML format"):
            _parse("<root><a></root>")

    def test_empty_payload_fails(self):
        with pytest.raises(InvalidFormatError):
            _parse("")
