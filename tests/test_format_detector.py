"""
Tests for input format detection and note unwrapping.
"""

import json

import pytest

from dme.domain.errors import FormatError
from dme.service.format_detector_service import (
    FormatDetectorService,
    JsonWrappedFormat,
    PlainTextFormat,
)


class TestJsonWrappedFormat:
    """Test the JSON wrapper format."""

    def test_claims_json_object(self):
        assert JsonWrappedFormat().can_parse('  {"data": "note"}  ')

    def test_rejects_plain_text_and_arrays(self):
        fmt = JsonWrappedFormat()
        assert not fmt.can_parse("Patient needs a CPAP")
        assert not fmt.can_parse('["a", "b"]')
        assert not fmt.can_parse("{not json")
        assert not fmt.can_parse("   ")

    def test_data_field_wins(self):
        raw = json.dumps({"note": "second", "data": "first"})
        assert JsonWrappedFormat().extract_note_text(raw) == "first"

    def test_field_priority_after_data(self):
        fmt = JsonWrappedFormat()
        raw = json.dumps({"physician_note": "last", "content": "content wins", "id": "x"})
        assert fmt.extract_note_text(raw) == "content wins"
        raw = json.dumps({"data": "   ", "text": "blank data is skipped"})
        assert fmt.extract_note_text(raw) == "blank data is skipped"

    def test_concatenates_string_fields_as_last_resort(self):
        raw = json.dumps({"line1": "Patient needs a CPAP.", "count": 3, "line2": "Ordered by Dr. Lee."})
        assert JsonWrappedFormat().extract_note_text(raw) == "Patient needs a CPAP.\nOrdered by Dr. Lee."

    def test_non_string_note_field_is_stringified(self):
        fmt = JsonWrappedFormat()
        assert fmt.extract_note_text('{"data": 123, "text": "ignored"}') == "123"
        raw = json.dumps({"note": {"body": "needs oxygen"}})
        assert fmt.extract_note_text(raw) == '{"body": "needs oxygen"}'
        assert fmt.extract_note_text('{"data": null, "text": "fallback"}') == "fallback"

    def test_object_without_text_raises(self):
        with pytest.raises(FormatError, match="could not extract"):
            JsonWrappedFormat().extract_note_text('{"count": 3, "flag": true}')


class TestPlainTextFormat:
    """Test the plain text fallback."""

    def test_always_claims_input(self):
        fmt = PlainTextFormat()
        assert fmt.can_parse("")
        assert fmt.can_parse("anything at all")

    def test_returns_trimmed_input(self):
        assert PlainTextFormat().extract_note_text("  Patient needs oxygen.\n\n") == "Patient needs oxygen."


class TestFormatDetectorService:
    """Test format selection order and failure behaviour."""

    def test_json_before_text(self):
        detector = FormatDetectorService()
        assert detector.detect('{"data": "x"}').name == "json"
        assert detector.detect("Patient needs a CPAP").name == "text"

    def test_detect_and_extract(self):
        detector = FormatDetectorService()
        assert detector.detect_and_extract('{"data": "Patient needs a CPAP"}') == "Patient needs a CPAP"
        assert detector.detect_and_extract("  Patient needs a CPAP  ") == "Patient needs a CPAP"

    def test_json_array_falls_back_to_text(self):
        assert FormatDetectorService().detect_and_extract('["CPAP"]') == '["CPAP"]'

    def test_empty_input_yields_empty_note(self):
        assert FormatDetectorService().detect_and_extract("   ") == ""

    def test_no_matching_format_raises(self):
        detector = FormatDetectorService(formats=[JsonWrappedFormat()])
        with pytest.raises(FormatError):
            detector.detect_and_extract("Patient needs a CPAP")
