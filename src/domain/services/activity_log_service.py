"""Activity log service: listing, aggregation and manual-entry mutations."""

import re
from collections.abc import Awaitable, Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import (
    ActivityLogNotFoundError,
    ImmutableLogError,
    InvalidIdError,
    ValidationError,
)
from domain.entities.activity import (
    MANUAL_CONTENT_MAX_LENGTH,
    MANUAL_CONTENT_MIN_LENGTH,
    ActivityLog,
    ActivityLogEntry,
    ActivityLogFilters,
    ActivityType,
    LogDetail,
    ManualLogDetail,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DetailLoader = Callable[[IUnitOfWork, list[UUID]], Awaitable[dict[UUID, LogDetail]]]


async def _load_manual_details(uow: IUnitOfWork, activity_ids: list[UUID]) -> dict[UUID, LogDetail]:
    return await uow.manual_logs.get_by_activity_ids(activity_ids)  # type: ignore[return-value]


# Variants whose detail table is joined when assembling responses. Other
# variants are returned with no detail attached.
EAGER_DETAIL_LOADERS: dict[ActivityType, DetailLoader] = {
    ActivityType.MANUAL: _load_manual_details,
}


# Canonical 8-4-4-4-12 hex form only; no braces, urn prefix or bare hex.
_CANONICAL_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def parse_log_id(value: UUID | str) -> UUID:
    """Parse an identifier, raising ``InvalidIdError`` when malformed."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not _CANONICAL_UUID.fullmatch(value):
        raise InvalidIdError(str(value))
    return UUID(value)


def validate_manual_content(content: str) -> str:
    """Enforce the manual note length bounds."""
    if len(content) < MANUAL_CONTENT_MIN_LENGTH:
        raise ValidationError(
            "Content cannot be empty",
            details=[{"field": "content", "message": "Content cannot be empty"}],
        )
    if len(content) > MANUAL_CONTENT_MAX_LENGTH:
        message = f"Content cannot exceed {MANUAL_CONTENT_MAX_LENGTH} characters"
        raise ValidationError(
            message,
            details=[{"field": "content", "message": message}],
        )
    return content


class ActivityLogService:
    """Service layer for activity log business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # --- Reads ---

    async def list_filtered(
        self, filters: ActivityLogFilters | None = None
    ) -> list[ActivityLogEntry]:
        """Get logs matching the filter set, newest first.

        An empty filter set behaves exactly like no filter.
        """
        if filters is not None and filters.is_empty:
            filters = None

        async with self._uow_factory() as uow:
            logs = await uow.activity_logs.find_all(filters)
            return await self._assemble(uow, logs)

    async def list_unreviewed_and_acknowledge(self) -> list[ActivityLogEntry]:
        """Get unreviewed logs and mark them reviewed in the same transaction.

        The returned entries reflect the state before acknowledgement, so
        callers can still highlight which ones are new.
        """
        async with self._uow_factory() as uow:
            logs = await uow.activity_logs.find_all(ActivityLogFilters(reviewed=False))
            entries = await self._assemble(uow, logs)

            if logs:
                await uow.activity_logs.mark_reviewed([log.id for log in logs])
                await uow.commit()
                logger.info("activity_logs_acknowledged", count=len(logs))

            return entries

    async def get(self, log_id: UUID | str) -> ActivityLogEntry:
        """Get a single log with its detail."""
        parsed_id = parse_log_id(log_id)
        async with self._uow_factory() as uow:
            log = await uow.activity_logs.get(parsed_id)
            if not log:
                raise ActivityLogNotFoundError(str(parsed_id))

            entries = await self._assemble(uow, [log])
            return entries[0]

    # --- Mutations ---

    async def create_manual(self, content: str) -> ActivityLogEntry:
        """Create a manual log and its note in one transaction."""
        validate_manual_content(content)

        async with self._uow_factory() as uow:
            log = await uow.activity_logs.create(ActivityLog(type=ActivityType.MANUAL))
            detail = await uow.manual_logs.create(
                ManualLogDetail(activity_id=log.id, content=content)
            )
            await uow.commit()

        logger.info("activity_log_created", activity_id=str(log.id), type=log.type.value)
        return ActivityLogEntry(log=log, detail=detail)

    async def update(
        self,
        log_id: UUID | str,
        reviewed: bool | None = None,
        content: str | None = None,
    ) -> ActivityLogEntry:
        """Update the review flag and/or note of a manual log.

        ``reviewed=True`` stamps ``reviewed_at``; ``reviewed=False`` clears the
        flag but keeps any previous ``reviewed_at``.
        """
        parsed_id = parse_log_id(log_id)

        async with self._uow_factory() as uow:
            await self._get_mutable(uow, parsed_id)

            if content is not None:
                validate_manual_content(content)

            log: ActivityLog | None = None
            if reviewed is not None:
                log = await uow.activity_logs.update_review_state(
                    parsed_id,
                    reviewed=reviewed,
                    reviewed_at=datetime.utcnow() if reviewed else None,
                )

            detail: ManualLogDetail | None = None
            if content is not None:
                detail = await uow.manual_logs.update_content(parsed_id, content)

            if log is None:
                log = await uow.activity_logs.get(parsed_id)
            if log is None:
                raise ActivityLogNotFoundError(
                    str(parsed_id), message="Activity log not found after update"
                )

            if detail is None:
                detail = await uow.manual_logs.get_by_activity_id(parsed_id)

            await uow.commit()

        logger.info(
            "activity_log_updated",
            activity_id=str(parsed_id),
            reviewed=reviewed,
            content_updated=content is not None,
        )
        return ActivityLogEntry(log=log, detail=detail)

    async def delete(self, log_id: UUID | str) -> None:
        """Delete a manual log. Its note is removed by the store's cascade."""
        parsed_id = parse_log_id(log_id)

        async with self._uow_factory() as uow:
            await self._get_mutable(uow, parsed_id)

            deleted = await uow.activity_logs.delete(parsed_id)
            if not deleted:
                raise ActivityLogNotFoundError(str(parsed_id))

            await uow.commit()

        logger.info("activity_log_deleted", activity_id=str(parsed_id))

    async def mark_reviewed(self, log_ids: list[UUID]) -> list[ActivityLog]:
        """Mark several logs reviewed at once. An empty list is a no-op."""
        if not log_ids:
            return []

        async with self._uow_factory() as uow:
            updated = await uow.activity_logs.mark_reviewed(log_ids)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    # --- Helpers ---

    async def _get_mutable(self, uow: IUnitOfWork, log_id: UUID) -> ActivityLog:
        """Load a log that the API is allowed to change."""
        log = await uow.activity_logs.get(log_id)
        if not log:
            raise ActivityLogNotFoundError(str(log_id))
        if not log.is_mutable:
            raise ImmutableLogError(str(log_id), log.type.value)
        return log

    async def _assemble(
        self, uow: IUnitOfWork, logs: list[ActivityLog]
    ) -> list[ActivityLogEntry]:
        """Join each log with its detail record, preserving order."""
        ids_by_type: dict[ActivityType, list[UUID]] = {}
        for log in logs:
            ids_by_type.setdefault(log.type, []).append(log.id)

        details: dict[UUID, LogDetail] = {}
        for log_type, ids in ids_by_type.items():
            loader = EAGER_DETAIL_LOADERS.get(log_type)
            if loader is not None:
                details.update(await loader(uow, ids))

        return [ActivityLogEntry(log=log, detail=details.get(log.id)) for log in logs]
