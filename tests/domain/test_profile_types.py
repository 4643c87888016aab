"""Tests for options parsing and result serialization."""

import json
from datetime import datetime, timezone

import pytest

from data_profiler.domain.types import (
    AnalysisMetadata,
    AnalysisResult,
    FieldMetadata,
    ParseOptions,
)


class TestParseOptions:
    def test_defaults(self):
        options = ParseOptions()
        assert options.detect_patterns is False
        assert options.check_uniqueness is False
        assert options.sample_size is None
        assert options.fixed_widths is None

    def test_from_mapping_accepts_camel_case(self):
        options = ParseOptions.from_mapping(
            {"detectPatterns": True, "sampleSize": 10, "fixedWidths": [4, 10]}
        )
        assert options.detect_patterns is True
        assert options.sample_size == 10
        assert options.fixed_widths == (4, 10)

    def test_from_mapping_skips_none(self):
        assert ParseOptions.from_mapping({"encoding": None}) == ParseOptions()

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(KeyError, match="colour"):
            ParseOptions.from_mapping({"colour": "blue"})

    @pytest.mark.parametrize("widths", [5, "4,10"])
    def test_from_mapping_rejects_scalar_fixed_widths(self, widths):
        with pytest.raises(ValueError, match="list of column widths"):
            ParseOptions.from_mapping({"fixed_widths": widths})

    def test_merged_with_overrides_only_non_none(self):
        base = ParseOptions(sample_size=5, encoding="latin1")
        merged = base.merged_with({"sample_size": 2, "encoding": None, "detect_patterns": True})
        assert merged.sample_size == 2
        assert merged.encoding == "latin1"
        assert merged.detect_patterns is True
        assert base.sample_size == 5

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ParseOptions().sample_size = 3


class TestSerialization:
    def test_field_metadata_omits_absent_facets(self):
        meta = FieldMetadata("age", "Age", "number.integer", 2, examples=(30,))
        assert meta.to_dict() == {
            "normalizedName": "age",
            "originalHeader": "Age",
            "dataType": "number.integer",
            "length": 2,
            "examples": [30],
        }

    def test_field_metadata_includes_requested_facets(self):
        meta = FieldMetadata("age", "Age", "number.integer", 2, pattern="numeric", is_unique=False)
        out = meta.to_dict()
        assert out["pattern"] == "numeric"
        assert out["isUnique"] is False

    def test_result_shape(self):
        analyzed = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)
        result = AnalysisResult(
            source_type="csv",
            total_records=3,
            metadata=AnalysisMetadata(date_analyzed=analyzed, version="1.0.0"),
            fields=(FieldMetadata("a", "A", "string", 1, examples=("x",)),),
        )
        out = json.loads(json.dumps(result.to_dict()))
        assert out["sourceType"] == "csv"
        assert out["totalRecords"] == 3
        assert out["metadata"] == {
            "fileName": "Unknown",
            "dateAnalyzed": "2024-06-01T09:30:00+00:00",
            "version": "1.0.0",
        }
        assert out["fields"][0]["examples"] == ["x"]
