"""Frontend log sink route."""

from fastapi import APIRouter, Body, Depends, Request

from api.v1.dependencies import get_frontend_log_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.frontend_log import FrontendLogEntrySchema, FrontendLogReceipt
from core.rate_limit import limiter
from domain.services.frontend_log_service import FrontendLogService

router = APIRouter(prefix="/frontend-logs", tags=["frontend-logs"])


@router.post(
    "",
    response_model=FrontendLogReceipt,
    summary="Submit browser log entries",
    responses={
        200: {"description": "Entries accepted"},
        400: {"model": ErrorResponse, "description": "Malformed entry"},
    },
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def submit_frontend_logs(
    request: Request,
    body: FrontendLogEntrySchema | list[FrontendLogEntrySchema] = Body(...),
    service: FrontendLogService = Depends(get_frontend_log_service),
) -> FrontendLogReceipt:
    """Accept one entry or a batch and write them to the server log."""
    entries = body if isinstance(body, list) else [body]
    received = service.ingest(
        [entry.to_domain() for entry in entries],
        user_agent=request.headers.get("user-agent"),
        client_ip=request.client.host if request.client else None,
    )
    return FrontendLogReceipt(received=received)
