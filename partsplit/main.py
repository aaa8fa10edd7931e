"""FastAPI application entrypoint using router composition."""
from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI

import uvicorn

from partsplit.api.default import router as default_router
from partsplit.api.parts import router as parts_router
from partsplit.config import get_settings

router = APIRouter()
logger = logging.getLogger(__name__)

router.include_router(default_router)
router.include_router(parts_router)

settings = get_settings()
logging.getLogger("partsplit").setLevel(settings.log_level)
app = FastAPI(title=settings.app_name, version="0.1.0")
app.include_router(router)


if __name__ == "__main__":
    # Allow running via `python -m partsplit.main` (useful in simple dev setups).
    uvicorn.run("partsplit.main:app", host="0.0.0.0", port=9000, reload=True)
