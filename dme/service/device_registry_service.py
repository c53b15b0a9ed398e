from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from dme.domain.ports.Device_extractor_provider import Device_extractor_provider
from dme.lib.logger import get_logger
from .cpap_extractor_service import CpapExtractorService
from .oxygen_tank_extractor_service import OxygenTankExtractorService


class DeviceExtractorRegistry:
    """Read-only dispatch table from device type to its extraction strategy.

    Built once from the available strategies. Two strategies declaring the
    same device type is a configuration error and fails construction.
    """

    def __init__(self, extractors: Iterable[Device_extractor_provider]) -> None:
        self.logger = get_logger("registry")
        table: Dict[str, Device_extractor_provider] = {}
        for extractor in extractors:
            key = extractor.device_type
            if key in table:
                raise ValueError(
                    f"duplicate extractor for device type '{key}': "
                    f"{type(table[key]).__name__} and {type(extractor).__name__}"
                )
            table[key] = extractor
        self._extractors: Mapping[str, Device_extractor_provider] = MappingProxyType(table)
        self.logger.info("registered %d device-specific extractor(s): %s", len(table), ", ".join(table))

    def lookup(self, device_key: Optional[str]) -> Optional[Device_extractor_provider]:
        if not device_key or not device_key.strip():
            return None
        extractor = self._extractors.get(device_key)
        if extractor is None:
            self.logger.debug("no extractor registered for device type: %s", device_key)
        return extractor

    @property
    def device_types(self) -> List[str]:
        return list(self._extractors)

    def __len__(self) -> int:
        return len(self._extractors)

    def __contains__(self, device_key: object) -> bool:
        return device_key in self._extractors


def build_default_registry() -> DeviceExtractorRegistry:
    return DeviceExtractorRegistry([CpapExtractorService(), OxygenTankExtractorService()])
