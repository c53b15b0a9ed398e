from __future__ import annotations

import json
from typing import Iterable, List, Optional

from dme.domain.errors import FormatError
from dme.domain.ports.Input_format_provider import Input_format_provider
from dme.lib.logger import get_logger


class JsonWrappedFormat(Input_format_provider):
    """Note wrapped in a JSON object, e.g. ``{"data": "Patient needs a CPAP ..."}``."""

    name = "json"

    NOTE_FIELDS = ("data", "note", "text", "content", "physicianNote", "physician_note")

    def __init__(self) -> None:
        self.logger = get_logger("format")

    def can_parse(self, raw: str) -> bool:
        if not raw or not raw.strip():
            return False
        trimmed = raw.strip()
        if not trimmed.startswith(("{", "[")):
            return False
        try:
            doc = json.loads(trimmed)
        except ValueError:
            return False
        # Arrays and scalars fall through to plain text
        return isinstance(doc, dict)

    def extract_note_text(self, raw: str) -> str:
        if not raw or not raw.strip():
            raise FormatError("input cannot be empty")
        try:
            doc = json.loads(raw.strip())
        except ValueError as e:
            self.logger.error("invalid JSON input: %s", e)
            raise FormatError("invalid JSON format") from e
        if not isinstance(doc, dict):
            raise FormatError("JSON input is not an object")

        for field in self.NOTE_FIELDS:
            value = self._as_text(doc.get(field))
            if value and value.strip():
                self.logger.debug("note text taken from '%s' field", field)
                return value.strip()

        strings = [v for v in doc.values() if isinstance(v, str)]
        joined = "\n".join(strings)
        if joined.strip():
            self.logger.debug("note text assembled from %d string field(s)", len(strings))
            return joined.strip()

        raise FormatError("could not extract note text from JSON structure")

    @staticmethod
    def _as_text(value: object) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, str):
            return value
        # Numbers, booleans and nested structures keep their JSON spelling
        return json.dumps(value, ensure_ascii=False)


class PlainTextFormat(Input_format_provider):
    """Fallback format: the input is the note."""

    name = "text"

    def can_parse(self, raw: str) -> bool:
        return True

    def extract_note_text(self, raw: str) -> str:
        return (raw or "").strip()


class FormatDetectorService:
    """Pick the first input format that claims the raw text and unwrap the note.

    Formats are tried in the order given, so pass the most specific first.
    """

    def __init__(self, formats: Optional[Iterable[Input_format_provider]] = None) -> None:
        self.logger = get_logger("format")
        self.formats: List[Input_format_provider] = (
            list(formats) if formats is not None else [JsonWrappedFormat(), PlainTextFormat()]
        )

    def detect(self, raw: str) -> Input_format_provider:
        for fmt in self.formats:
            if fmt.can_parse(raw):
                self.logger.debug("selected input format: %s", fmt.name)
                return fmt
        self.logger.error("no input format accepts the input (%d chars)", len(raw or ""))
        raise FormatError("no parser available for the input format")

    def detect_and_extract(self, raw: str) -> str:
        return self.detect(raw).extract_note_text(raw)
