from fastapi import HTTPException, Request

from ledger_brain.manager import ParserService


def get_service(request: Request) -> ParserService:
    service = getattr(request.app.state, "service", None)
    if not service:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return service
