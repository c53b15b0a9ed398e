from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from dme.domain.schemas.extraction_method import Extraction_method


class Settings_provider(ABC):
    @abstractmethod
    def get(self, key: str, default: Optional[Any] = None) -> Any:
        pass

    @abstractmethod
    def get_bool(self, key: str, default: bool = False) -> bool:
        pass

    @property
    @abstractmethod
    def extraction_method(self) -> Extraction_method:
        """Configured strategy: pattern-based or model-based extraction."""
        pass

    @abstractmethod
    def public(self) -> Dict[str, str]:
        """Settings that are safe to expose to API clients."""
        pass
