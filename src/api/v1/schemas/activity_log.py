"""Pydantic schemas for the Activity Log API."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.activity import (
    MANUAL_CONTENT_MAX_LENGTH,
    MANUAL_CONTENT_MIN_LENGTH,
    ActivityLogFilters,
    ActivityType,
)


class ManualLogDetails(BaseModel):
    """Payload of a manual log entry."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(
        ...,
        min_length=MANUAL_CONTENT_MIN_LENGTH,
        max_length=MANUAL_CONTENT_MAX_LENGTH,
    )


class ActivityLogFiltersSchema(BaseModel):
    """Optional conjunctive filters for searching logs."""

    model_config = ConfigDict(extra="forbid")

    from_date: datetime | None = Field(None, description="Inclusive lower bound on created_at")
    to_date: datetime | None = Field(None, description="Inclusive upper bound on created_at")
    reviewed: bool | None = None
    type: ActivityType | None = None

    @field_validator("from_date", "to_date")
    @classmethod
    def _to_naive_utc(cls, value: datetime | None) -> datetime | None:
        """Stored timestamps are naive UTC; align aware bounds with them."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def to_domain(self) -> ActivityLogFilters:
        return ActivityLogFilters(
            from_date=self.from_date,
            to_date=self.to_date,
            reviewed=self.reviewed,
            type=self.type,
        )


class ActivityLogSearchRequest(BaseModel):
    """Schema for POST /activity-logs/search."""

    model_config = ConfigDict(extra="forbid")

    filters: ActivityLogFiltersSchema | None = None


class CreateManualLogRequest(BaseModel):
    """Schema for creating a manual log."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"details": {"content": "Reviewed the deploy runbook"}}},
    )

    details: ManualLogDetails


class UpdateActivityLogRequest(BaseModel):
    """Schema for updating a manual log (all fields optional)."""

    model_config = ConfigDict(extra="forbid")

    reviewed: bool | None = None
    details: ManualLogDetails | None = None


class ActivityLogDetailsResponse(BaseModel):
    """Detail payload of a log. Variants without a joined detail carry empty content."""

    content: str = ""


class ActivityLogResponse(BaseModel):
    """Schema for an activity log response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "type": "manual",
                "reviewed": False,
                "created_at": "2026-01-28T10:00:00Z",
                "reviewed_at": None,
                "details": {"content": "Reviewed the deploy runbook"},
            }
        },
    )

    id: UUID
    type: ActivityType
    reviewed: bool
    created_at: datetime
    reviewed_at: datetime | None
    details: ActivityLogDetailsResponse
