from __future__ import annotations

import re
from typing import Optional, Tuple

from dme.domain.ports.Common_field_extractor_provider import Common_field_extractor_provider
from dme.domain.schemas.device_type import Device_type
from dme.domain.schemas.result_data import ExtractionResult
from dme.lib.logger import get_logger


_LABEL = r"(?i:Ordering\s+Physician|Ordered\s+by|Physician)[:\s]+"
_DR = r"(?i:Dr\.)"
_CREDENTIAL = r"(?:[ \t]*,[ \t]*(?:MD|DO|DDS|DMD|PhD))"
_FLAGS = re.IGNORECASE | re.MULTILINE


class CommonFieldExtractorService(Common_field_extractor_provider):
    """Pattern-based extraction of the fields every DME order carries.

    Device type is decided by keyword priority (CPAP, then oxygen, then
    wheelchair). The ordering provider is searched with a list of patterns
    ordered from the most specific labelled form down to bare name fallbacks;
    the first candidate that passes the length check wins.

    Name words are joined by horizontal whitespace only so a match never runs
    onto the next line of the note.
    """

    DEVICE_KEYWORDS: Tuple[Tuple[str, Device_type], ...] = (
        ("cpap", Device_type.CPAP),
        ("oxygen", Device_type.OXYGEN_TANK),
        ("wheelchair", Device_type.WHEELCHAIR),
    )

    # Labels and the "Dr." prefix match in any case; name words and
    # credentials must be capitalized as written.
    PROVIDER_PATTERNS: Tuple[re.Pattern[str], ...] = (
        # Ordering Physician: Dr. Gregory[ H.][ House][, MD]
        re.compile(
            _LABEL
            + r"("
            + _DR
            + r"[ \t]+[A-Za-z]+(?:[ \t]+[A-Z]\.)?(?:[ \t]+[A-Za-z]+)?"
            + _CREDENTIAL
            + r"?)"
        ),
        # Ordered by Dr. First Last
        re.compile(
            _LABEL + r"(" + _DR + r"[ \t]+[A-Z][a-z]+[ \t]+[A-Z][a-z]+(?:[ \t]+[A-Z]\.)?(?:[ \t]+[A-Za-z]+)?)"
        ),
        # Physician: John Smith, MD
        re.compile(_LABEL + r"([A-Z][a-z]+(?:[ \t]+[A-Z]\.)?[ \t]+[A-Z][a-z]+" + _CREDENTIAL + r"?)"),
        # Dr. Name anywhere
        re.compile(r"\b(" + _DR + r"[ \t]+[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)?(?:[ \t]+[A-Z]\.)?)"),
        # First Last, MD anywhere
        re.compile(r"([A-Z][a-z]+[ \t]+[A-Z][a-z]+(?:[ \t]+[A-Z]\.)?" + _CREDENTIAL + r")\b"),
    )

    PATIENT_NAME_RE = re.compile(r"Patient\s+Name[:\s]+([A-Za-z \t]+?)[ \t]*(?:\r?\n|$)", _FLAGS)
    DOB_RE = re.compile(r"DOB[:\s]+(\d{2}/\d{2}/\d{4})", re.IGNORECASE)
    DIAGNOSIS_RE = re.compile(r"Diagnosis[:\s]+([A-Za-z \t]+?)[ \t]*(?:\r?\n|$)", _FLAGS)

    PROVIDER_MIN_LEN = 3
    PROVIDER_MAX_LEN = 100

    def __init__(self) -> None:
        self.logger = get_logger("common")

    def extract_common(self, note: str) -> ExtractionResult:
        if not note or not note.strip():
            self.logger.warning("empty note text provided for common field extraction")
            return ExtractionResult()

        return ExtractionResult(
            device=self.extract_device_type(note).value,
            ordering_provider=self.extract_ordering_provider(note),
            patient_name=self._first_group(self.PATIENT_NAME_RE, note, "patient name"),
            date_of_birth=self._first_group(self.DOB_RE, note, "date of birth"),
            diagnosis=self._first_group(self.DIAGNOSIS_RE, note, "diagnosis"),
        )

    def extract_device_type(self, note: str) -> Device_type:
        low = note.lower()
        for keyword, device in self.DEVICE_KEYWORDS:
            if keyword in low:
                self.logger.debug("detected device %s via '%s'", device.value, keyword)
                return device
        self.logger.warning("no recognized device type found in note")
        return Device_type.UNKNOWN

    def extract_ordering_provider(self, note: str) -> str:
        for idx, pattern in enumerate(self.PROVIDER_PATTERNS):
            for m in pattern.finditer(note):
                provider = m.group(1).strip()
                if self.PROVIDER_MIN_LEN < len(provider) < self.PROVIDER_MAX_LEN:
                    self.logger.debug("ordering provider '%s' matched pattern #%d", provider, idx)
                    return provider
                self.logger.warning(
                    "rejected provider candidate of length %d from pattern #%d", len(provider), idx
                )
        self.logger.warning(
            "no ordering provider found after trying %d patterns", len(self.PROVIDER_PATTERNS)
        )
        return "Unknown"

    def _first_group(self, pattern: re.Pattern[str], note: str, label: str) -> Optional[str]:
        m = pattern.search(note)
        if not m:
            self.logger.debug("%s not found", label)
            return None
        value = m.group(1).strip()
        return value or None
