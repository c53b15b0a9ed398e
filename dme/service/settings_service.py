from __future__ import annotations

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from dme.domain.ports.Settings_provider import Settings_provider
from dme.domain.schemas.extraction_method import Extraction_method


DEFAULTS: Dict[str, str] = {
    "EXTRACTION_METHOD": Extraction_method.PATTERN.value,
    "OLLAMA_HOST": "https://ollama.com",
    "OLLAMA_MODEL": "gpt-oss:120b",
    "LLM_TEMPERATURE": "0.1",
    "LLM_MAX_TOKENS": "1000",
    "DEFAULT_INPUT_FILE": "physician_note.txt",
    "API_ENDPOINT": "https://alert-api.com/DrExtract",
    "SUBMIT": "1",
    "SUBMIT_TIMEOUT_S": "15",
    "LOG_LEVEL": "INFO",
}


def _as_bool(v: object, default: bool = False) -> bool:
    if v is None:
        return default
    return str(v).lower() in ("1", "true", "yes")


class EnvSettings(Settings_provider):
    """Settings read from the process environment, seeded from ``.env``.

    ``overrides`` wins over the environment; used by tests and by callers
    that build settings programmatically.
    """

    def __init__(self, overrides: Optional[Dict[str, Any]] = None, load_env_file: bool = True) -> None:
        if load_env_file:
            load_dotenv()
        self.overrides: Dict[str, Any] = dict(overrides or {})

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        if key in self.overrides:
            return self.overrides[key]
        value = os.getenv(key)
        if value is not None and value != "":
            return value
        if default is not None:
            return default
        return DEFAULTS.get(key)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return _as_bool(self.get(key), default)

    def get_int(self, key: str) -> int:
        return int(self.get(key))

    def get_float(self, key: str) -> float:
        return float(self.get(key))

    @property
    def extraction_method(self) -> Extraction_method:
        raw = str(self.get("EXTRACTION_METHOD")).strip().lower()
        try:
            return Extraction_method(raw)
        except ValueError:
            raise ValueError(
                f"unsupported EXTRACTION_METHOD '{raw}', expected one of: "
                + ", ".join(m.value for m in Extraction_method)
            ) from None

    def public(self) -> Dict[str, str]:
        """Non-secret settings, safe to expose over HTTP."""
        keys = [
            "DOMAIN",
            "PORT",
            "ALLOWED_CORS_ORIGINS",
            "SWAGGER_ENABLED",
            "EXTRACTION_METHOD",
            "OLLAMA_HOST",
            "OLLAMA_MODEL",
            "API_ENDPOINT",
            "LOG_LEVEL",
        ]
        return {k: str(self.get(k) or "") for k in keys}
