from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from .extraction_method import Extraction_method


class NotePayload(BaseModel):
    """Raw physician note supplied by the caller."""

    text: Optional[str] = None
    path: Optional[str] = None
    source_name: Optional[str] = None
    content_type: Optional[str] = None

    @model_validator(mode="after")
    def validate_source(self) -> "NotePayload":
        # Require at least one source so the pipeline has something to read.
        if self.text is None and self.path is None:
            raise ValueError("note payload requires either inline text or a file path")
        return self


class ProcessingOptions(BaseModel):
    """Flags that control how the pipeline should process the note."""

    extraction_method: Optional[Extraction_method] = None
    submit: bool = False
    endpoint: Optional[str] = None


class RequestContext(BaseModel):
    """Request-scoped metadata propagated through the pipeline."""

    request_id: Optional[str] = None
    client_tags: List[str] = Field(default_factory=list)
    extra: Dict[str, Any] = Field(default_factory=dict)


class InputData(BaseModel):
    """Full payload consumed by the pipeline orchestrator."""

    note: NotePayload
    options: ProcessingOptions = Field(default_factory=ProcessingOptions)
    context: RequestContext = Field(default_factory=RequestContext)
    metadata: Dict[str, Any] = Field(default_factory=dict)
