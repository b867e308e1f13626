"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ConnectedRepoModel(Base):
    """Local git repository registered for activity tracking."""

    __tablename__ = "connected_local_git_repos"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    local_repo_path: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    remote_url: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class ActivityLogModel(Base):
    """Base activity log row; the detail lives in the table matching ``type``."""

    __tablename__ = "activity_logs"
    __table_args__ = (
        CheckConstraint(
            "type IN ('manual', 'git_commit', 'claude_code', 'git_checkout', 'git_hook_install')",
            name="ck_activity_logs_type",
        ),
        Index("ix_activity_logs_created_at", "created_at"),
        Index("ix_activity_logs_reviewed", "reviewed"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    reviewed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime)


class ManualLogModel(Base):
    """Free-text note attached to a ``manual`` activity log."""

    __tablename__ = "manual_logs"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    activity_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("activity_logs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    activity: Mapped["ActivityLogModel"] = relationship("ActivityLogModel")


class GitCommitModel(Base):
    """Commit detail for a ``git_commit`` activity log."""

    __tablename__ = "git_commits"
    __table_args__ = (
        UniqueConstraint("repo_id", "commit_hash", name="uq_git_commits_repo_hash"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    activity_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("activity_logs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    repo_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("connected_local_git_repos.id"),
        nullable=False,
        index=True,
    )
    commit_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    author_name: Mapped[str | None] = mapped_column(String(255))
    author_email: Mapped[str | None] = mapped_column(String(255))
    committed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    files_changed: Mapped[list[str] | None] = mapped_column(JSONB)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONB)

    activity: Mapped["ActivityLogModel"] = relationship("ActivityLogModel")
    repo: Mapped["ConnectedRepoModel"] = relationship("ConnectedRepoModel")


class ConversationModel(Base):
    """Assistant conversation detail for a ``claude_code`` activity log."""

    __tablename__ = "claude_code_conversations"
    __table_args__ = (
        CheckConstraint(
            "num_exchanges >= 0 AND num_tool_usages >= 0 AND num_tokens >= 0",
            name="ck_claude_code_conversations_counts",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    activity_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("activity_logs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    project_directory_name: Mapped[str | None] = mapped_column(String(255))
    conversation_file_path: Mapped[str] = mapped_column(Text, nullable=False)
    raw_jsonl: Mapped[str | None] = mapped_column(Text)
    parsed_content: Mapped[dict[str, Any] | None] = mapped_column(JSONB)
    bullet_points: Mapped[list[str] | None] = mapped_column(JSONB)
    num_exchanges: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    num_tool_usages: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    num_tokens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    started_at: Mapped[datetime | None] = mapped_column(DateTime)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONB)

    activity: Mapped["ActivityLogModel"] = relationship("ActivityLogModel")


class GitCheckoutModel(Base):
    """Checkout detail for a ``git_checkout`` activity log."""

    __tablename__ = "git_checkouts"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    activity_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("activity_logs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    repo_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("connected_local_git_repos.id"),
        nullable=False,
        index=True,
    )
    timestamp: Mapped[str] = mapped_column(String(64), nullable=False)
    prev_head: Mapped[str] = mapped_column(String(64), nullable=False)
    new_head: Mapped[str] = mapped_column(String(64), nullable=False)
    prev_branch: Mapped[str] = mapped_column(String(255), nullable=False)
    new_branch: Mapped[str] = mapped_column(String(255), nullable=False)
    repo_path: Mapped[str] = mapped_column(Text, nullable=False)
    repo_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    activity: Mapped["ActivityLogModel"] = relationship("ActivityLogModel")
    repo: Mapped["ConnectedRepoModel"] = relationship("ConnectedRepoModel")


class GitHookInstallModel(Base):
    """Hook installation detail for a ``git_hook_install`` activity log."""

    __tablename__ = "git_hooks_installed"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    activity_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("activity_logs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    repo_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("connected_local_git_repos.id"),
        nullable=False,
        index=True,
    )
    hook_type: Mapped[str] = mapped_column(String(64), nullable=False)
    hook_script_path: Mapped[str | None] = mapped_column(Text)
    installation_timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    repo_path: Mapped[str] = mapped_column(Text, nullable=False)
    repo_name: Mapped[str] = mapped_column(String(255), nullable=False)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONB)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    activity: Mapped["ActivityLogModel"] = relationship("ActivityLogModel")
    repo: Mapped["ConnectedRepoModel"] = relationship("ConnectedRepoModel")
