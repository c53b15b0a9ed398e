from abc import ABC, abstractmethod
from typing import Optional

from dme.domain.schemas.result_data import ExtractionResult


class Serializer_provider(ABC):
    @abstractmethod
    def serialize(self, result: ExtractionResult, indent: Optional[int] = None) -> str:
        pass
