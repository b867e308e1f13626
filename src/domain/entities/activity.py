"""Activity log domain entities.

An activity log is split across two records: the base ``ActivityLog`` row
carrying the type tag and review state, and exactly one detail record whose
shape is determined by that tag.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, Union
from uuid import UUID, uuid4

MANUAL_CONTENT_MIN_LENGTH = 1
MANUAL_CONTENT_MAX_LENGTH = 10000


class ActivityType(StrEnum):
    """Variant tag of an activity log."""

    MANUAL = "manual"
    GIT_COMMIT = "git_commit"
    CLAUDE_CODE = "claude_code"
    GIT_CHECKOUT = "git_checkout"
    GIT_HOOK_INSTALL = "git_hook_install"


@dataclass
class ActivityLog:
    """Base record of one logged event."""

    type: ActivityType
    id: UUID = field(default_factory=uuid4)
    reviewed: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    reviewed_at: datetime | None = None

    @property
    def is_mutable(self) -> bool:
        """Only manual entries can be edited or deleted."""
        return self.type == ActivityType.MANUAL


@dataclass
class ManualLogDetail:
    """Free-text note written by the user."""

    activity_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class GitCommitDetail:
    """A commit observed in a connected repository."""

    activity_id: UUID
    repo_id: UUID
    commit_hash: str
    message: str
    committed_at: datetime
    id: UUID = field(default_factory=uuid4)
    author_name: str | None = None
    author_email: str | None = None
    files_changed: list[str] | None = None
    metadata: dict[str, Any] | None = None


@dataclass
class ConversationDetail:
    """Summary of an AI assistant conversation transcript."""

    activity_id: UUID
    conversation_file_path: str
    id: UUID = field(default_factory=uuid4)
    project_directory_name: str | None = None
    raw_jsonl: str | None = None
    parsed_content: dict[str, Any] | None = None
    bullet_points: list[str] | None = None
    num_exchanges: int = 0
    num_tool_usages: int = 0
    num_tokens: int = 0
    started_at: datetime | None = None
    ended_at: datetime | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        for name in ("num_exchanges", "num_tool_usages", "num_tokens"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass
class CheckoutDetail:
    """A branch or commit checkout in a connected repository."""

    activity_id: UUID
    repo_id: UUID
    timestamp: str
    prev_head: str
    new_head: str
    prev_branch: str
    new_branch: str
    repo_path: str
    repo_name: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class HookInstallDetail:
    """A git hook installed into a connected repository."""

    activity_id: UUID
    repo_id: UUID
    hook_type: str
    installation_timestamp: datetime
    repo_path: str
    repo_name: str
    id: UUID = field(default_factory=uuid4)
    hook_script_path: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


LogDetail = Union[
    ManualLogDetail,
    GitCommitDetail,
    ConversationDetail,
    CheckoutDetail,
    HookInstallDetail,
]

DETAIL_TYPES: dict[ActivityType, type] = {
    ActivityType.MANUAL: ManualLogDetail,
    ActivityType.GIT_COMMIT: GitCommitDetail,
    ActivityType.CLAUDE_CODE: ConversationDetail,
    ActivityType.GIT_CHECKOUT: CheckoutDetail,
    ActivityType.GIT_HOOK_INSTALL: HookInstallDetail,
}


@dataclass
class ActivityLogEntry:
    """A base log joined with its detail record.

    ``detail`` is ``None`` when the variant's detail table was not joined.
    """

    log: ActivityLog
    detail: LogDetail | None = None

    def __post_init__(self) -> None:
        if self.detail is not None and not isinstance(
            self.detail, DETAIL_TYPES[self.log.type]
        ):
            raise TypeError(
                f"{type(self.detail).__name__} cannot be attached to a "
                f"{self.log.type.value} log"
            )


@dataclass
class ActivityLogFilters:
    """Conjunctive filter over base logs. ``None`` fields impose no constraint."""

    from_date: datetime | None = None
    to_date: datetime | None = None
    reviewed: bool | None = None
    type: ActivityType | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.from_date is None
            and self.to_date is None
            and self.reviewed is None
            and self.type is None
        )
