from abc import ABC, abstractmethod

from dme.domain.schemas.result_data import ExtractionResult


class Field_extractor_provider(ABC):
    @abstractmethod
    def extract(self, note: str) -> ExtractionResult:
        """Extract all DME order fields from the physician note.

        Implementations always return a result; a blank note or nothing
        recognisable yields the all-defaults ExtractionResult.
        """
        pass
