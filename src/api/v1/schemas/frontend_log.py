"""Pydantic schemas for the frontend log sink."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.frontend_log import FrontendLogEntry, FrontendLogLevel


class FrontendLogEntrySchema(BaseModel):
    """One log line reported by the browser client."""

    model_config = ConfigDict(populate_by_name=True)

    level: FrontendLogLevel
    message: str = Field(..., max_length=10000)
    timestamp: str
    session_id: str = Field(..., alias="sessionId")
    context: dict[str, Any] | None = None

    def to_domain(self) -> FrontendLogEntry:
        return FrontendLogEntry(
            level=self.level,
            message=self.message,
            timestamp=self.timestamp,
            session_id=self.session_id,
            context=self.context or {},
        )


class FrontendLogReceipt(BaseModel):
    """Acknowledgement of received client logs."""

    received: int
