"""
XML source adapter.

The document is parsed with ElementTree and converted into a plain tree where
every element with children or attributes becomes a dict: attributes map to
their string values, child elements map tag -> list of child values, and
non-blank text sits under ``"_"``. Leaf elements become their text.

The record collection is the root's first child key holding a list. Headers
are the first record's keys lower-cased; single-element lists in record fields
collapse to their sole value. Namespace URIs are stripped from tag names.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from data_profiler.adapters.base import ParsedSource, has_extension
from data_profiler.domain.coercion import coerce_row
from data_profiler.domain.source import RawSource, decode_text
from data_profiler.domain.types import ParseOptions
from data_profiler.exceptions import (
    EmptySourceError,
    InvalidFormatError,
    MissingRecordCollectionError,
)
from data_profiler.logging_config import get_logger

logger = get_logger("adapters.xml")

TEXT_KEY = "_"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _assign(node: dict[str, Any], key: str, value: Any) -> None:
    existing = node.get(key)
    if existing is None:
        node[key] = [value]
    elif isinstance(existing, list):
        existing.append(value)
    else:
        node[key] = [existing, value]


def element_to_tree(elem: ET.Element) -> Any:
    """Convert an element into nested dicts/lists/strings."""
    children = list(elem)
    text = elem.text or ""
    if not children and not elem.attrib:
        return text

    node: dict[str, Any] = {
        _local_name(name): value for name, value in elem.attrib.items()
    }
    if text.strip():
        node[TEXT_KEY] = text
    for child in children:
        _assign(node, _local_name(child.tag), element_to_tree(child))
    return node


def collapse(value: Any) -> Any:
    """Unwrap the single-element lists the tree conversion produces."""
    if isinstance(value, list) and len(value) == 1:
        return value[0]
    return value


def find_record_collection(root: Any) -> tuple[str, list[Any]]:
    """Return the first root key whose value is a list, with that list."""
    if isinstance(root, dict):
        for key, value in root.items():
            if isinstance(value, list):
                return key, value
    raise MissingRecordCollectionError()


class XmlSourceAdapter:
    """Read ``.xml`` sources as one row per repeating element under the root."""

    source_type = "xml"

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, ".xml")

    def parse(self, source: RawSource, options: ParseOptions) -> ParsedSource:
        content = decode_text(source, options.encoding, self.source_type)
        try:
            root_elem = ET.fromstring(content)
        except ET.ParseError as e:
            raise InvalidFormatError(self.source_type, f"Invalid XML format: {e}") from e

        try:
            record_key, records = find_record_collection(element_to_tree(root_elem))
        except MissingRecordCollectionError as e:
            e.root_tag = _local_name(root_elem.tag)
            raise
        logger.debug("record collection", extra={"record_key": record_key})

        if not records:
            raise EmptySourceError(self.source_type, "XML file must contain at least one record")
        if not isinstance(records[0], dict):
            raise InvalidFormatError(
                self.source_type,
                f"XML records <{record_key}> must contain child elements or attributes",
            )

        headers = tuple(key.lower() for key in records[0])
        rows = []
        for record in records:
            fields = (
                {key.lower(): value for key, value in record.items()}
                if isinstance(record, dict)
                else {}
            )
            rows.append(coerce_row([collapse(fields.get(h)) for h in headers], headers))
        return ParsedSource(self.source_type, headers, rows)
