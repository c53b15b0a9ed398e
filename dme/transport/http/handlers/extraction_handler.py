from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from dme.domain.errors import FormatError
from dme.domain.schemas.extraction_method import Extraction_method
from dme.domain.schemas.input_data import InputData, NotePayload, ProcessingOptions, RequestContext
from dme.domain.schemas.result_data import ResultData
from dme.service.pipeline_service import PipelineService


router = APIRouter()


@router.post("/extract", summary="Extract DME order data from a physician note", response_model=ResultData)
async def extract(
    request: Request,
    method: Optional[Extraction_method] = Query(default=None, description="Override the configured extraction method"),
    submit: bool = Query(default=False, description="Forward the canonical JSON to the submission endpoint"),
    endpoint: Optional[str] = Query(default=None, description="Submission endpoint, defaults to API_ENDPOINT"),
) -> ResultData:
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail="note must be UTF-8 encoded text") from e

    input_data = InputData(
        note=NotePayload(text=text, source_name="request", content_type=request.headers.get("content-type")),
        options=ProcessingOptions(extraction_method=method, submit=submit, endpoint=endpoint),
        context=RequestContext(request_id=request.headers.get("x-request-id")),
    )

    # Use pre-initialized pipeline from app state when available
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        pipeline = PipelineService()
    try:
        return pipeline.run(input_data)
    except HTTPException:
        raise
    except FormatError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        # Keep message short for client; details are in server logs
        raise HTTPException(status_code=500, detail=f"processing failed: {e}") from e
