from abc import ABC, abstractmethod

from dme.domain.schemas.result_data import ExtractionResult


class Common_field_extractor_provider(ABC):
    @abstractmethod
    def extract_common(self, note: str) -> ExtractionResult:
        """Extract device type and patient/provider fields shared by all devices."""
        pass
