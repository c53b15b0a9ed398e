from __future__ import annotations

from typing import Optional

from dme.domain.ports.Common_field_extractor_provider import Common_field_extractor_provider
from dme.domain.ports.Field_extractor_provider import Field_extractor_provider
from dme.domain.schemas.device_type import Device_type
from dme.domain.schemas.result_data import ExtractionResult
from dme.lib.logger import get_logger
from .common_field_service import CommonFieldExtractorService
from .device_registry_service import DeviceExtractorRegistry, build_default_registry


class FieldExtractorService(Field_extractor_provider):
    """Rule-based extractor for physician DME notes.

    Two passes over the note:
    - common fields (device type, provider, patient data) for every order;
    - device-specific fields from the strategy registered for the detected
      device, if any.

    A blank note short-circuits to the default result. A known device with no
    registered strategy (e.g. wheelchair) is logged and returned with common
    fields only.
    """

    def __init__(
        self,
        common: Optional[Common_field_extractor_provider] = None,
        registry: Optional[DeviceExtractorRegistry] = None,
    ) -> None:
        self.logger = get_logger("extract")
        self.common = common or CommonFieldExtractorService()
        self.registry = registry if registry is not None else build_default_registry()

    def extract(self, note: str) -> ExtractionResult:
        if not note or not note.strip():
            self.logger.warning("empty note text provided for extraction")
            return ExtractionResult()

        result = self.common.extract_common(note)

        if result.device != Device_type.UNKNOWN.value:
            extractor = self.registry.lookup(result.device)
            if extractor is not None:
                self.logger.debug("applying %s extractor", result.device)
                result = extractor.extract(note, result)
            else:
                self.logger.warning("no device-specific extractor found for device type: %s", result.device)

        self.logger.info(
            "extracted: device=%s; provider=%s; patient=%s",
            result.device,
            result.ordering_provider,
            result.patient_name,
        )
        return result
