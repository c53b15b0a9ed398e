from abc import ABC, abstractmethod


class Input_format_provider(ABC):
    name: str = "unknown"

    @abstractmethod
    def can_parse(self, raw: str) -> bool:
        """Return True when this format claims the raw input."""
        pass

    @abstractmethod
    def extract_note_text(self, raw: str) -> str:
        """Return the physician note text carried by the raw input.

        Raises FormatError when the input was claimed but holds no note text.
        """
        pass
