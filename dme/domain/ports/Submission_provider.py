from abc import ABC, abstractmethod


class Submission_provider(ABC):
    @abstractmethod
    def submit(self, payload: str, endpoint: str) -> bool:
        """POST the canonical JSON payload; True on a 2xx response."""
        pass
