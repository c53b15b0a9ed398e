from __future__ import annotations

from fastapi import APIRouter

from .handlers.extraction_handler import router as extraction_router
from .handlers.setting_handler import router as settings_router


api_router = APIRouter()
api_router.include_router(extraction_router, prefix="/api", tags=["extraction"])
api_router.include_router(settings_router, prefix="/api", tags=["settings"])
