"""Log entry shipped from the browser client."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class FrontendLogLevel(StrEnum):
    """Severity levels the client can report."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


@dataclass
class FrontendLogEntry:
    """One client-side log line."""

    level: FrontendLogLevel
    message: str
    timestamp: str
    session_id: str
    context: dict[str, Any] = field(default_factory=dict)
