"""Relay of browser log lines into the backend log stream."""

import structlog

from domain.entities.frontend_log import FrontendLogEntry, FrontendLogLevel

logger = structlog.get_logger("frontend")

# Context keys that would collide with the fields added below.
_RESERVED_KEYS = frozenset(
    {"event", "frontend_timestamp", "frontend_session_id", "user_agent", "client_ip"}
)

_LEVEL_METHODS = {
    FrontendLogLevel.ERROR: "error",
    FrontendLogLevel.WARN: "warning",
    FrontendLogLevel.INFO: "info",
    FrontendLogLevel.DEBUG: "debug",
}


class FrontendLogService:
    """Re-emits client log entries through structlog with a ``[FRONTEND]`` prefix."""

    def ingest(
        self,
        entries: list[FrontendLogEntry],
        user_agent: str | None = None,
        client_ip: str | None = None,
    ) -> int:
        """Log every entry at its own level and return how many were accepted."""
        for entry in entries:
            emit = getattr(logger, _LEVEL_METHODS.get(entry.level, "info"))
            emit(
                f"[FRONTEND] {entry.message}",
                frontend_timestamp=entry.timestamp,
                frontend_session_id=entry.session_id,
                user_agent=user_agent,
                client_ip=client_ip,
                **{k: v for k, v in entry.context.items() if k not in _RESERVED_KEYS},
            )

        logger.debug(
            "frontend_logs_received",
            count=len(entries),
            session_ids=sorted({entry.session_id for entry in entries if entry.session_id}),
        )
        return len(entries)
