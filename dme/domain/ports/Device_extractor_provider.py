from abc import ABC, abstractmethod

from dme.domain.schemas.result_data import ExtractionResult


class Device_extractor_provider(ABC):
    @property
    @abstractmethod
    def device_type(self) -> str:
        """Registry key, one of the Device_type values."""
        pass

    @abstractmethod
    def extract(self, note: str, result: ExtractionResult) -> ExtractionResult:
        """Return a copy of ``result`` with the device-specific fields filled in."""
        pass
