from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from dme.lib.logger import get_logger
from .format_detector_service import FormatDetectorService


class NoteReaderService:
    """Read a physician note file and unwrap it with the format detector."""

    def __init__(self, detector: Optional[FormatDetectorService] = None) -> None:
        self.logger = get_logger("reader")
        self.detector = detector or FormatDetectorService()

    def read_raw(self, path: Union[str, Path]) -> str:
        if path is None or not str(path).strip():
            raise ValueError("file path cannot be empty")
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            self.logger.error("file not found: %s", file_path)
            raise FileNotFoundError(f"physician note file not found: {file_path}")
        self.logger.info("reading physician note from: %s", file_path)
        raw = file_path.read_text(encoding="utf-8")
        self.logger.debug("read %d characters", len(raw))
        return raw

    def read(self, path: Union[str, Path]) -> str:
        return self.detector.detect_and_extract(self.read_raw(path))
