from typing import Annotated

from fastapi import APIRouter, Depends

from ledger_brain.api.dependencies import get_service
from ledger_brain.domain.categories import DEFAULT_CATEGORIES
from ledger_brain.manager import ParserService

router = APIRouter()


@router.get("/categories")
async def get_categories() -> list[str]:
    return list(DEFAULT_CATEGORIES)


@router.get("/health")
async def health(
    service: Annotated[ParserService, Depends(get_service)],
) -> dict[str, object]:
    return {"status": "ok", "ai_enabled": service.ai_enabled}
