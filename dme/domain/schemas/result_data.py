from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .device_type import Device_type


class ExtractionResult(BaseModel):
    """DME order fields pulled out of a single physician note.

    Instances are frozen: the orchestrator builds the common fields first and
    device extractors return an updated copy via ``model_copy``.
    """

    model_config = ConfigDict(frozen=True)

    device: str = Device_type.UNKNOWN.value
    ordering_provider: str = "Unknown"
    patient_name: Optional[str] = None
    date_of_birth: Optional[str] = None  # MM/DD/YYYY as written in the note
    diagnosis: Optional[str] = None

    # CPAP
    mask_type: Optional[str] = None
    add_ons: Optional[List[str]] = None
    qualifier: Optional[str] = None

    # Oxygen tank
    liters: Optional[str] = None
    usage: Optional[str] = None


class MetaInfo(BaseModel):
    request_id: Optional[str] = None
    input_format: Optional[str] = None
    extraction_method: Optional[str] = None
    timings_ms: Dict[str, int] = Field(default_factory=dict)


class ResultData(BaseModel):
    meta: MetaInfo = Field(default_factory=MetaInfo)
    note_text: Optional[str] = None
    result: ExtractionResult = Field(default_factory=ExtractionResult)
    payload: str = ""
    submitted: Optional[bool] = None
