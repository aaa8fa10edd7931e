"""Default/general routes (health, supported algorithms)."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter

from partsplit.libs.file_parts import available_algorithms

router = APIRouter()


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/api/v1/algorithms", response_model=List[str])
async def list_algorithms() -> List[str]:
    return available_algorithms()
