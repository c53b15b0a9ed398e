from __future__ import annotations

import json
from typing import Any, Dict, Optional

from dme.domain.ports.Serializer_provider import Serializer_provider
from dme.domain.schemas.device_type import Device_type
from dme.domain.schemas.result_data import ExtractionResult
from dme.lib.logger import get_logger


class ResultSerializerService(Serializer_provider):
    """Canonical JSON for submission.

    ``device`` and ``ordering_provider`` are always present; every other key
    only when it carries a value. Oxygen fields are emitted for oxygen tank
    orders only.
    """

    OPTIONAL_FIELDS = (
        ("mask_type", "mask_type"),
        ("add_ons", "add_ons"),
        ("qualifier", "qualifier"),
        ("patient_name", "patient_name"),
        ("date_of_birth", "dob"),
        ("diagnosis", "diagnosis"),
    )
    OXYGEN_FIELDS = (("liters", "liters"), ("usage", "usage"))

    def __init__(self) -> None:
        self.logger = get_logger("serializer")

    def to_payload(self, result: ExtractionResult) -> Dict[str, Any]:
        if result is None:
            raise ValueError("cannot serialize an empty extraction result")

        payload: Dict[str, Any] = {
            "device": result.device,
            "ordering_provider": result.ordering_provider,
        }
        fields = self.OPTIONAL_FIELDS
        if result.device == Device_type.OXYGEN_TANK.value:
            fields = fields + self.OXYGEN_FIELDS
        for attr, key in fields:
            value = getattr(result, attr)
            if self._has_value(value):
                payload[key] = list(value) if isinstance(value, list) else value
        return payload

    def serialize(self, result: ExtractionResult, indent: Optional[int] = None) -> str:
        payload = self.to_payload(result)
        separators = (",", ":") if indent is None else (",", ": ")
        text = json.dumps(payload, ensure_ascii=False, indent=indent, separators=separators)
        self.logger.debug("serialized DME data: %s", text)
        return text

    def _has_value(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        if isinstance(value, list):
            return len(value) > 0
        return True
