from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Request

from dme.service.settings_service import EnvSettings


router = APIRouter()


@router.get("/settings", summary="Current server settings")
def get_settings(request: Request) -> Dict[str, str]:
    pipeline = getattr(request.app.state, "pipeline", None)
    settings = pipeline.settings if pipeline is not None else EnvSettings()
    return settings.public()
