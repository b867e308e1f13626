"""Activity log API routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_activity_log_service
from api.v1.schemas.activity_log import (
    ActivityLogDetailsResponse,
    ActivityLogResponse,
    ActivityLogSearchRequest,
    CreateManualLogRequest,
    UpdateActivityLogRequest,
)
from api.v1.schemas.common import ErrorResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.activity import ActivityLogEntry, ManualLogDetail
from domain.services.activity_log_service import ActivityLogService

router = APIRouter(prefix="/activity-logs", tags=["activity-logs"])


@router.get(
    "",
    response_model=list[ActivityLogResponse],
    summary="List all activity logs",
    responses={
        200: {"description": "All logs, newest first"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_activity_logs(
    request: Request,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> list[ActivityLogResponse]:
    """Get every activity log, newest first. Does not change review state."""
    entries = await service.list_filtered()
    return [_build_log_response(entry) for entry in entries]


@router.post(
    "/search",
    response_model=list[ActivityLogResponse],
    summary="Search activity logs",
    responses={
        200: {"description": "Logs matching all supplied filters, newest first"},
        400: {"model": ErrorResponse, "description": "Invalid filter shape"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def search_activity_logs(
    request: Request,
    body: ActivityLogSearchRequest | None = None,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> list[ActivityLogResponse]:
    """
    Filter logs by date range, review state and type.

    Filters are combined with AND; omitted filters, or a missing body, impose no
    constraint.
    The body uses POST so filters travel as JSON rather than query params.
    """
    filters = body.filters.to_domain() if body and body.filters else None
    entries = await service.list_filtered(filters)
    return [_build_log_response(entry) for entry in entries]


@router.get(
    "/unreviewed",
    response_model=list[ActivityLogResponse],
    summary="View and acknowledge unreviewed logs",
    responses={
        200: {"description": "Logs that were unreviewed before this call"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def list_unreviewed_activity_logs(
    request: Request,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> list[ActivityLogResponse]:
    """
    Get unreviewed logs and mark them reviewed.

    Viewing acknowledges: the response shows `reviewed: false` for the
    returned logs, but they are stored as reviewed once this call returns.
    """
    entries = await service.list_unreviewed_and_acknowledge()
    return [_build_log_response(entry) for entry in entries]


@router.get(
    "/{log_id}",
    response_model=ActivityLogResponse,
    summary="Get an activity log",
    responses={
        200: {"description": "Log with its details"},
        400: {"model": ErrorResponse, "description": "Malformed ID"},
        404: {"model": ErrorResponse, "description": "Log not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_activity_log(
    request: Request,
    log_id: str,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> ActivityLogResponse:
    """Get a single activity log by ID."""
    entry = await service.get(log_id)
    return _build_log_response(entry)


@router.post(
    "",
    response_model=ActivityLogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a manual log",
    responses={
        201: {"description": "Manual log created"},
        400: {"model": ErrorResponse, "description": "Invalid content"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_manual_log(
    request: Request,
    body: CreateManualLogRequest,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> ActivityLogResponse:
    """Create a manual note. Content must be 1-10000 characters."""
    entry = await service.create_manual(body.details.content)
    return _build_log_response(entry)


@router.put(
    "/{log_id}",
    response_model=ActivityLogResponse,
    summary="Update a manual log",
    responses={
        200: {"description": "Log updated"},
        400: {"model": ErrorResponse, "description": "Malformed ID, invalid content or non-manual log"},
        404: {"model": ErrorResponse, "description": "Log not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_activity_log(
    request: Request,
    log_id: str,
    body: UpdateActivityLogRequest,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> ActivityLogResponse:
    """
    Update the review flag and/or content of a manual log.

    Setting `reviewed` to true stamps `reviewed_at`; setting it to false keeps
    the previous `reviewed_at`.
    """
    entry = await service.update(
        log_id,
        reviewed=body.reviewed,
        content=body.details.content if body.details else None,
    )
    return _build_log_response(entry)


@router.delete(
    "/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a manual log",
    responses={
        204: {"description": "Log deleted"},
        400: {"model": ErrorResponse, "description": "Malformed ID or non-manual log"},
        404: {"model": ErrorResponse, "description": "Log not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_activity_log(
    request: Request,
    log_id: str,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> None:
    """Delete a manual log together with its note."""
    await service.delete(log_id)
    return None


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def _build_log_response(entry: ActivityLogEntry) -> ActivityLogResponse:
    """Convert a joined log to the response schema."""
    log = entry.log
    details = ActivityLogDetailsResponse()
    if isinstance(entry.detail, ManualLogDetail):
        details = ActivityLogDetailsResponse(content=entry.detail.content)

    return ActivityLogResponse(
        id=log.id,
        type=log.type,
        reviewed=log.reviewed,
        created_at=_as_utc(log.created_at),
        reviewed_at=_as_utc(log.reviewed_at) if log.reviewed_at else None,
        details=details,
    )
