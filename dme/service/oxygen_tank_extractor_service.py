from __future__ import annotations

import re
from typing import Optional

from dme.domain.ports.Device_extractor_provider import Device_extractor_provider
from dme.domain.schemas.device_type import Device_type
from dme.domain.schemas.result_data import ExtractionResult
from dme.lib.logger import get_logger


class OxygenTankExtractorService(Device_extractor_provider):
    """Flow rate and usage context for oxygen tank orders."""

    # "2 L", "2L", "2.5 l"
    LITERS_RE = re.compile(r"(\d+(?:\.\d+)?)[ \t]*L", re.IGNORECASE)

    def __init__(self) -> None:
        self.logger = get_logger("oxygen")

    @property
    def device_type(self) -> str:
        return Device_type.OXYGEN_TANK.value

    def extract(self, note: str, result: ExtractionResult) -> ExtractionResult:
        if result is None:
            raise ValueError("result accumulator is required")
        if result.device != self.device_type:
            raise ValueError(f"oxygen tank extractor invoked for device '{result.device}'")
        if not note or not note.strip():
            self.logger.warning("empty note text provided for oxygen tank extraction")
            return result

        return result.model_copy(update={"liters": self._liters(note), "usage": self._usage(note)})

    def _liters(self, note: str) -> Optional[str]:
        m = self.LITERS_RE.search(note)
        if not m:
            return None
        liters = f"{m.group(1)} L"
        self.logger.debug("extracted liters: %s", liters)
        return liters

    def _usage(self, note: str) -> Optional[str]:
        low = note.lower()
        sleep = "sleep" in low
        exertion = "exertion" in low
        if sleep and exertion:
            return "sleep and exertion"
        if sleep:
            return "sleep"
        if exertion:
            return "exertion"
        return None
