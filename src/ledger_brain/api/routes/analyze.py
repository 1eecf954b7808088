import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from ledger_brain.api.dependencies import get_service
from ledger_brain.api.schemas import AnalyzeRequest, TextRequest
from ledger_brain.logger import get_logger
from ledger_brain.manager import ParserService
from ledger_brain.models import BulkParseResult, ParsedTransaction, ValidationResult

logger = get_logger(__name__)

router = APIRouter()


@router.post("/validate", response_model=ValidationResult)
async def validate_text(
    req: TextRequest,
    service: Annotated[ParserService, Depends(get_service)],
) -> ValidationResult:
    return service.validate(req.text)


@router.post("/parse", response_model=ParsedTransaction | None)
async def parse_text(
    req: TextRequest,
    service: Annotated[ParserService, Depends(get_service)],
) -> ParsedTransaction | None:
    return service.parse_local(req.text)


@router.post("/analyze", response_model=BulkParseResult)
async def analyze_text(
    req: AnalyzeRequest,
    service: Annotated[ParserService, Depends(get_service)],
) -> BulkParseResult:
    result = await asyncio.to_thread(
        service.analyze,
        req.text,
        current_datetime=req.current_datetime,
        custom_categories=req.custom_categories,
    )
    if result.is_error:
        logger.info("[ANALYZE] %s: %s", result.error, result.reason)
    return result
