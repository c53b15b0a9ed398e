"""
Shared fixtures for the DME extraction tests.
"""

import pytest

from dme.service.common_field_service import CommonFieldExtractorService
from dme.service.device_registry_service import build_default_registry
from dme.service.field_extractor_service import FieldExtractorService
from dme.service.serializer_service import ResultSerializerService
from dme.service.settings_service import EnvSettings


OXYGEN_NOTE = (
    "Patient Name: Harold Finch\n"
    "DOB: 04/12/1952\n"
    "Diagnosis: COPD\n"
    "Prescription: Requires a portable oxygen tank delivering 2 L per minute.\n"
    "Usage: During sleep and exertion.\n"
    "Ordering Physician: Dr. Cuddy"
)

CPAP_NOTE = (
    "Patient needs a CPAP with full face mask and heated humidifier. "
    "AHI > 20. Ordering Physician: Dr. Smith"
)

UNKNOWN_NOTE = "Patient needs some medical equipment. Ordered by Dr. Unknown."


@pytest.fixture
def oxygen_note():
    return OXYGEN_NOTE


@pytest.fixture
def cpap_note():
    return CPAP_NOTE


@pytest.fixture
def unknown_note():
    return UNKNOWN_NOTE


@pytest.fixture
def common_extractor():
    return CommonFieldExtractorService()


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def extractor(registry):
    return FieldExtractorService(registry=registry)


@pytest.fixture
def serializer():
    return ResultSerializerService()


@pytest.fixture
def settings():
    """Pattern-based settings that ignore the developer's .env file."""
    return EnvSettings(
        overrides={"EXTRACTION_METHOD": "pattern", "API_ENDPOINT": "https://alert-api.com/DrExtract"},
        load_env_file=False,
    )
