from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from dme.domain.ports.Field_extractor_provider import Field_extractor_provider
from dme.domain.schemas.device_type import Device_type
from dme.domain.schemas.result_data import ExtractionResult
from dme.lib.logger import get_logger


CPAP_FIELDS = ("mask_type", "add_ons", "qualifier")
OXYGEN_FIELDS = ("liters", "usage")


class LLMService(Field_extractor_provider):
    """LLM-based extractor that turns a physician note into ExtractionResult via Ollama.

    Controlled by settings:
      - OLLAMA_HOST (default: https://ollama.com)
      - OLLAMA_API_KEY (required for cloud)
      - OLLAMA_MODEL (default: gpt-oss:120b)

    Any failure (no client, request error, unparsable answer) yields the
    default ExtractionResult; this extractor never raises from ``extract``.
    """

    def __init__(
        self,
        host: str = "https://ollama.com",
        model: str = "gpt-oss:120b",
        api_key: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        client: Optional[Any] = None,
    ) -> None:
        self.logger = get_logger("llm")
        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        if client is None:
            try:
                from ollama import Client  # type: ignore
            except Exception as e:  # pragma: no cover
                raise RuntimeError("ollama package is required for LLM extraction") from e
            headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
            client = Client(host=host, headers=headers)
        self.client = client

    @classmethod
    def from_settings(cls, settings) -> "LLMService":
        return cls(
            host=settings.get("OLLAMA_HOST"),
            model=settings.get("OLLAMA_MODEL"),
            api_key=settings.get("OLLAMA_API_KEY"),
            temperature=settings.get_float("LLM_TEMPERATURE"),
            max_tokens=settings.get_int("LLM_MAX_TOKENS"),
        )

    def extract(self, note: str) -> ExtractionResult:
        if not note or not note.strip():
            self.logger.warning("empty note text provided for LLM extraction")
            return ExtractionResult()

        self.logger.info("llm: sending note (%d chars) to model=%s", len(note), self.model)
        try:
            raw = self._chat(self._build_prompt(note))
        except Exception as e:
            self.logger.error("ollama request failed: %s", e)
            return ExtractionResult()

        data = self._json_from_text(raw)
        if data is None:
            self.logger.warning("LLM did not return valid JSON")
            return ExtractionResult()
        try:
            result = self._coerce_to_result(data)
        except Exception as e:
            self.logger.error("could not map LLM answer to result: %s", e)
            return ExtractionResult()

        self.logger.info("llm extracted: device=%s; provider=%s", result.device, result.ordering_provider)
        return result

    # -------- helpers --------
    def _chat(self, prompt: str) -> str:
        messages = [
            {
                "role": "system",
                "content": (
                    "You are a medical data extraction assistant. Extract DME (Durable Medical "
                    "Equipment) information from physician notes and return ONLY valid JSON."
                ),
            },
            {"role": "user", "content": prompt},
        ]
        chunks = self.client.chat(
            self.model,
            messages=messages,
            stream=True,
            options={"temperature": self.temperature, "num_predict": self.max_tokens},
        )
        text_parts: List[str] = []
        for part in chunks:
            try:
                text_parts.append(part.get("message", {}).get("content", "") or "")
            except AttributeError:
                continue
        return "".join(text_parts)

    def _build_prompt(self, note: str) -> str:
        schema = {
            "device": "CPAP | OxygenTank | Wheelchair | Unknown",
            "ordering_provider": "string (e.g. Dr. Name) | Unknown",
            "patient_name": "string|null",
            "dob": "MM/DD/YYYY|null",
            "diagnosis": "string|null",
            "mask_type": "full face | nasal pillow | nasal | null",
            "add_ons": ["humidifier | heated humidifier"],
            "qualifier": "string (e.g. AHI > 20)|null",
            "liters": "string (e.g. 2 L)|null",
            "usage": "sleep | exertion | sleep and exertion | null",
        }
        instructions = (
            "Extract DME information from the following physician note. "
            "Return only valid JSON without comments, strictly following the schema below. "
            "Use null for fields that are not present. Fill mask_type, add_ons and qualifier "
            "only for CPAP, liters and usage only for OxygenTank."
        )
        return (
            f"{instructions}\n\nSchema:\n{json.dumps(schema, indent=2)}\n\n"
            f"Physician note:\n{note}\n\nReturn ONLY the JSON object."
        )

    def _json_from_text(self, text: str) -> Optional[dict]:
        if not text:
            return None
        start = text.find("{")
        last = text.rfind("}")
        if start == -1 or last <= start:
            return None
        snippet = text[start : last + 1]
        snippet = re.sub(r"^```(?:json)?", "", snippet.strip())
        snippet = re.sub(r"```$", "", snippet.strip())
        try:
            data = json.loads(snippet)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def _coerce_to_result(self, data: Dict[str, Any]) -> ExtractionResult:
        def text(*keys: str) -> Optional[str]:
            for key in keys:
                value = data.get(key)
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    value = str(value)
                if isinstance(value, str) and value.strip() and value.strip().lower() != "null":
                    return value.strip()
            return None

        add_ons_raw = data.get("add_ons")
        if isinstance(add_ons_raw, str):
            add_ons_raw = [add_ons_raw]
        add_ons: List[str] = []
        if isinstance(add_ons_raw, list):
            for item in add_ons_raw:
                if isinstance(item, str) and item.strip() and item.strip() not in add_ons:
                    add_ons.append(item.strip())

        device = Device_type.normalize(text("device"))
        fields: Dict[str, Any] = {
            "device": device.value,
            "ordering_provider": text("ordering_provider", "orderingProvider") or "Unknown",
            "patient_name": text("patient_name", "patientName"),
            "date_of_birth": text("dob", "date_of_birth", "dateOfBirth"),
            "diagnosis": text("diagnosis"),
            "mask_type": text("mask_type", "maskType"),
            "add_ons": add_ons or None,
            "qualifier": text("qualifier"),
            "liters": text("liters"),
            "usage": text("usage"),
        }
        # Device-specific fields only belong to their own device
        if device is not Device_type.CPAP:
            for key in CPAP_FIELDS:
                fields[key] = None
        if device is not Device_type.OXYGEN_TANK:
            for key in OXYGEN_FIELDS:
                fields[key] = None
        return ExtractionResult(**fields)
