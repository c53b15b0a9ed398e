from __future__ import annotations

import re
from typing import List, Optional

from dme.domain.ports.Device_extractor_provider import Device_extractor_provider
from dme.domain.schemas.device_type import Device_type
from dme.domain.schemas.result_data import ExtractionResult
from dme.lib.logger import get_logger


class CpapExtractorService(Device_extractor_provider):
    """Mask type, humidifier add-on and AHI qualifier for CPAP orders."""

    # "nasal pillow" must be tested before the bare "nasal"
    MASK_TYPES = ("full face", "nasal pillow", "nasal")
    AHI_RE = re.compile(r"AHI\s*[>:]\s*(\d+)", re.IGNORECASE)

    def __init__(self) -> None:
        self.logger = get_logger("cpap")

    @property
    def device_type(self) -> str:
        return Device_type.CPAP.value

    def extract(self, note: str, result: ExtractionResult) -> ExtractionResult:
        if result is None:
            raise ValueError("result accumulator is required")
        if result.device != self.device_type:
            raise ValueError(f"CPAP extractor invoked for device '{result.device}'")
        if not note or not note.strip():
            self.logger.warning("empty note text provided for CPAP extraction")
            return result

        return result.model_copy(
            update={
                "mask_type": self._mask_type(note),
                "add_ons": self._add_ons(note),
                "qualifier": self._qualifier(note),
            }
        )

    def _mask_type(self, note: str) -> Optional[str]:
        low = note.lower()
        for mask in self.MASK_TYPES:
            if mask in low:
                self.logger.debug("detected %s mask", mask)
                return mask
        return None

    def _add_ons(self, note: str) -> Optional[List[str]]:
        low = note.lower()
        if "humidifier" not in low:
            return None
        add_on = "heated humidifier" if "heated humidifier" in low else "humidifier"
        self.logger.debug("detected add-on: %s", add_on)
        return [add_on]

    def _qualifier(self, note: str) -> Optional[str]:
        m = self.AHI_RE.search(note)
        if not m:
            return None
        self.logger.debug("detected qualifier: %s", m.group(0))
        return m.group(0)
