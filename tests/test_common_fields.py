"""
Tests for device type and patient/provider field extraction.
"""

import pytest

from dme.domain.schemas.device_type import Device_type
from dme.domain.schemas.result_data import ExtractionResult


class TestDeviceType:
    """Test keyword-priority device detection."""

    @pytest.mark.parametrize(
        "note, expected",
        [
            ("Patient requires a cpap machine.", Device_type.CPAP),
            ("Start OXYGEN therapy.", Device_type.OXYGEN_TANK),
            ("Needs a Wheelchair for mobility.", Device_type.WHEELCHAIR),
            ("Needs crutches.", Device_type.UNKNOWN),
        ],
    )
    def test_keywords(self, common_extractor, note, expected):
        assert common_extractor.extract_device_type(note) is expected

    def test_cpap_beats_other_keywords(self, common_extractor):
        note = "Wheelchair user on oxygen, now also needs a CPAP."
        assert common_extractor.extract_device_type(note) is Device_type.CPAP

    def test_oxygen_beats_wheelchair(self, common_extractor):
        note = "Wheelchair bound patient, portable oxygen needed."
        assert common_extractor.extract_device_type(note) is Device_type.OXYGEN_TANK


class TestOrderingProvider:
    """Test the ordered provider patterns and their validation."""

    @pytest.mark.parametrize(
        "note, expected",
        [
            ("Ordering Physician: Dr. Cuddy", "Dr. Cuddy"),
            ("Ordered by Dr. Gregory House, MD", "Dr. Gregory House, MD"),
            ("Ordering Physician: Dr. Lisa A. Cuddy", "Dr. Lisa A. Cuddy"),
            ("Physician: John Smith, MD", "John Smith, MD"),
            ("Seen today with Dr. Wilson", "Dr. Wilson"),
            ("Reviewed by James Wilson, DO", "James Wilson, DO"),
        ],
    )
    def test_patterns(self, common_extractor, note, expected):
        assert common_extractor.extract_ordering_provider(note) == expected

    def test_name_does_not_run_onto_next_line(self, common_extractor):
        note = "Ordering Physician: Dr. Smith\nDiagnosis: COPD"
        assert common_extractor.extract_ordering_provider(note) == "Dr. Smith"

    def test_missing_provider_is_unknown(self, common_extractor):
        assert common_extractor.extract_ordering_provider("No provider mentioned here.") == "Unknown"

    def test_overlong_candidate_is_rejected(self, common_extractor):
        note = "Ordering Physician: Dr. " + "A" + "b" * 120
        assert common_extractor.extract_ordering_provider(note) == "Unknown"

    def test_overlong_candidate_falls_through_to_next_match(self, common_extractor):
        note = "Ordering Physician: Dr. " + "A" + "b" * 120 + "\nCountersigned: Dr. House"
        assert common_extractor.extract_ordering_provider(note) == "Dr. House"

    def test_lowercase_words_after_label_are_not_a_name(self, common_extractor):
        note = "Patient seen by physician today for oxygen. Dr. House ordering."
        assert common_extractor.extract_ordering_provider(note) == "Dr. House"

    def test_lowercase_do_is_not_a_credential(self, common_extractor):
        note = "Uses oxygen during sleep, do not exceed 2 L."
        assert common_extractor.extract_ordering_provider(note) == "Unknown"

    def test_label_and_prefix_match_in_any_case(self, common_extractor):
        assert common_extractor.extract_ordering_provider("ORDERED BY DR. Chase") == "DR. Chase"


class TestPatientFields:
    """Test patient name, DOB and diagnosis extraction."""

    def test_fields_from_labelled_note(self, common_extractor, oxygen_note):
        result = common_extractor.extract_common(oxygen_note)
        assert result.patient_name == "Harold Finch"
        assert result.date_of_birth == "04/12/1952"
        assert result.diagnosis == "COPD"

    def test_dob_is_captured_verbatim(self, common_extractor):
        result = common_extractor.extract_common("Needs a CPAP. DOB: 99/99/1900")
        assert result.date_of_birth == "99/99/1900"

    def test_missing_fields_are_absent(self, common_extractor, cpap_note):
        result = common_extractor.extract_common(cpap_note)
        assert result.patient_name is None
        assert result.date_of_birth is None
        assert result.diagnosis is None

    def test_diagnosis_stops_at_end_of_line(self, common_extractor):
        result = common_extractor.extract_common("Diagnosis: Sleep Apnea\nPatient needs a CPAP")
        assert result.diagnosis == "Sleep Apnea"

    def test_blank_note_gives_defaults(self, common_extractor):
        assert common_extractor.extract_common("  \n ") == ExtractionResult()


class TestDeviceTypeNormalize:
    """Test mapping free-form device labels onto the vocabulary."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Oxygen Tank", Device_type.OXYGEN_TANK),
            ("cpap", Device_type.CPAP),
            ("wheelchair", Device_type.WHEELCHAIR),
            ("walker", Device_type.UNKNOWN),
            (None, Device_type.UNKNOWN),
        ],
    )
    def test_normalize(self, label, expected):
        assert Device_type.normalize(label) is expected
