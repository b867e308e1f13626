"""Integration tests for the SQLAlchemy stores."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.entities.activity import (
    ActivityLog,
    ActivityLogFilters,
    ActivityType,
    CheckoutDetail,
    ConversationDetail,
    GitCommitDetail,
    HookInstallDetail,
    ManualLogDetail,
)
from domain.entities.repo import ConnectedRepo
from infrastructure.database.models import ConversationModel, GitCommitModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    return lambda: SQLAlchemyUnitOfWork(session_factory)


async def _create_log(uow_factory, type: ActivityType, created_at: datetime, reviewed: bool = False) -> ActivityLog:
    async with uow_factory() as uow:
        log = await uow.activity_logs.create(
            ActivityLog(type=type, created_at=created_at, reviewed=reviewed)
        )
        await uow.commit()
        return log


async def _create_repo(uow_factory, path: str = "/src/fuel") -> ConnectedRepo:
    async with uow_factory() as uow:
        repo = await uow.repos.create(ConnectedRepo(name="fuel", local_repo_path=path))
        await uow.commit()
        return repo


class TestActivityLogStore:
    @pytest.mark.asyncio
    async def test_find_all_orders_newest_first(self, uow_factory) -> None:
        base = datetime(2026, 1, 10, 12, 0)
        a = await _create_log(uow_factory, ActivityType.MANUAL, base)
        b = await _create_log(uow_factory, ActivityType.GIT_COMMIT, base + timedelta(hours=1))
        c = await _create_log(uow_factory, ActivityType.CLAUDE_CODE, base - timedelta(hours=1))

        async with uow_factory() as uow:
            logs = await uow.activity_logs.find_all()

        assert [log.id for log in logs] == [b.id, a.id, c.id]

    @pytest.mark.asyncio
    async def test_filters_are_conjunctive(self, uow_factory) -> None:
        base = datetime(2026, 1, 10, 12, 0)
        await _create_log(uow_factory, ActivityType.MANUAL, base, reviewed=True)
        match = await _create_log(uow_factory, ActivityType.MANUAL, base + timedelta(days=1))
        await _create_log(uow_factory, ActivityType.GIT_CHECKOUT, base + timedelta(days=1))
        await _create_log(uow_factory, ActivityType.MANUAL, base + timedelta(days=3))

        filters = ActivityLogFilters(
            from_date=base,
            to_date=base + timedelta(days=2),
            reviewed=False,
            type=ActivityType.MANUAL,
        )
        async with uow_factory() as uow:
            logs = await uow.activity_logs.find_all(filters)

        assert [log.id for log in logs] == [match.id]

    @pytest.mark.asyncio
    async def test_update_review_state_without_timestamp_keeps_stored(self, uow_factory) -> None:
        log = await _create_log(uow_factory, ActivityType.MANUAL, datetime(2026, 1, 1))
        stamped = datetime(2026, 1, 2, 9, 30)

        async with uow_factory() as uow:
            await uow.activity_logs.update_review_state(log.id, reviewed=True, reviewed_at=stamped)
            updated = await uow.activity_logs.update_review_state(
                log.id, reviewed=False, reviewed_at=None
            )
            await uow.commit()

        assert updated is not None
        assert updated.reviewed is False
        assert updated.reviewed_at == stamped

    @pytest.mark.asyncio
    async def test_update_review_state_missing_returns_none(self, uow_factory) -> None:
        async with uow_factory() as uow:
            assert await uow.activity_logs.update_review_state(uuid4(), True, None) is None

    @pytest.mark.asyncio
    async def test_mark_reviewed_sets_flag_and_timestamp(self, uow_factory) -> None:
        a = await _create_log(uow_factory, ActivityType.MANUAL, datetime(2026, 1, 1))
        b = await _create_log(uow_factory, ActivityType.GIT_HOOK_INSTALL, datetime(2026, 1, 2))
        untouched = await _create_log(uow_factory, ActivityType.MANUAL, datetime(2026, 1, 3))

        async with uow_factory() as uow:
            updated = await uow.activity_logs.mark_reviewed([a.id, b.id])
            await uow.commit()

        assert {log.id for log in updated} == {a.id, b.id}
        assert all(log.reviewed and log.reviewed_at is not None for log in updated)

        async with uow_factory() as uow:
            other = await uow.activity_logs.get(untouched.id)
        assert other is not None
        assert other.reviewed is False

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, uow_factory) -> None:
        async with uow_factory() as uow:
            assert await uow.activity_logs.delete(uuid4()) is False

    @pytest.mark.asyncio
    async def test_rollback_on_error_discards_writes(self, uow_factory) -> None:
        with pytest.raises(RuntimeError):
            async with uow_factory() as uow:
                await uow.activity_logs.create(ActivityLog(type=ActivityType.MANUAL))
                raise RuntimeError("boom")

        async with uow_factory() as uow:
            assert await uow.activity_logs.find_all() == []


class TestManualLogStore:
    @pytest.mark.asyncio
    async def test_batch_lookup_keyed_by_activity(self, uow_factory) -> None:
        first = await _create_log(uow_factory, ActivityType.MANUAL, datetime(2026, 1, 1))
        second = await _create_log(uow_factory, ActivityType.MANUAL, datetime(2026, 1, 2))
        async with uow_factory() as uow:
            await uow.manual_logs.create(ManualLogDetail(activity_id=first.id, content="one"))
            await uow.manual_logs.create(ManualLogDetail(activity_id=second.id, content="two"))
            await uow.commit()

        async with uow_factory() as uow:
            details = await uow.manual_logs.get_by_activity_ids([first.id, second.id, uuid4()])
            empty = await uow.manual_logs.get_by_activity_ids([])

        assert {k: v.content for k, v in details.items()} == {first.id: "one", second.id: "two"}
        assert empty == {}

    @pytest.mark.asyncio
    async def test_update_content_bumps_updated_at(self, uow_factory) -> None:
        log = await _create_log(uow_factory, ActivityType.MANUAL, datetime(2026, 1, 1))
        async with uow_factory() as uow:
            created = await uow.manual_logs.create(
                ManualLogDetail(
                    activity_id=log.id,
                    content="draft",
                    created_at=datetime(2026, 1, 1),
                    updated_at=datetime(2026, 1, 1),
                )
            )
            await uow.commit()

        async with uow_factory() as uow:
            updated = await uow.manual_logs.update_content(log.id, "final")
            await uow.commit()

        assert updated is not None
        assert updated.content == "final"
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_one_note_per_log(self, uow_factory) -> None:
        log = await _create_log(uow_factory, ActivityType.MANUAL, datetime(2026, 1, 1))

        with pytest.raises(IntegrityError):
            async with uow_factory() as uow:
                await uow.manual_logs.create(ManualLogDetail(activity_id=log.id, content="a"))
                await uow.manual_logs.create(ManualLogDetail(activity_id=log.id, content="b"))

    @pytest.mark.asyncio
    async def test_note_requires_existing_log(self, uow_factory) -> None:
        with pytest.raises(IntegrityError):
            async with uow_factory() as uow:
                await uow.manual_logs.create(ManualLogDetail(activity_id=uuid4(), content="x"))


class TestCascadeDelete:
    @pytest.mark.asyncio
    async def test_deleting_base_log_removes_detail(
        self, uow_factory, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        repo = await _create_repo(uow_factory)
        log = await _create_log(uow_factory, ActivityType.GIT_COMMIT, datetime(2026, 1, 1))
        async with uow_factory() as uow:
            await uow.git_commits.create(
                GitCommitDetail(
                    activity_id=log.id,
                    repo_id=repo.id,
                    commit_hash="deadbeef",
                    message="Initial commit",
                    committed_at=datetime(2026, 1, 1),
                    files_changed=["README.md"],
                )
            )
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.activity_logs.delete(log.id) is True
            await uow.commit()

        async with session_factory() as session:
            result = await session.execute(select(GitCommitModel))
            assert result.scalars().all() == []


class TestDetailStores:
    @pytest.mark.asyncio
    async def test_git_commit_lookup_by_hash(self, uow_factory) -> None:
        repo = await _create_repo(uow_factory)
        log = await _create_log(uow_factory, ActivityType.GIT_COMMIT, datetime(2026, 1, 1))
        async with uow_factory() as uow:
            await uow.git_commits.create(
                GitCommitDetail(
                    activity_id=log.id,
                    repo_id=repo.id,
                    commit_hash="cafebabe",
                    message="Add filters",
                    committed_at=datetime(2026, 1, 1),
                    metadata={"branch": "main"},
                )
            )
            await uow.commit()

        async with uow_factory() as uow:
            found = await uow.git_commits.get_by_hash("cafebabe", repo.id)
            missing = await uow.git_commits.get_by_hash("cafebabe", uuid4())

        assert found is not None
        assert found.activity_id == log.id
        assert found.metadata == {"branch": "main"}
        assert missing is None

    @pytest.mark.asyncio
    async def test_conversation_round_trip(self, uow_factory) -> None:
        log = await _create_log(uow_factory, ActivityType.CLAUDE_CODE, datetime(2026, 1, 1))
        async with uow_factory() as uow:
            await uow.conversations.create(
                ConversationDetail(
                    activity_id=log.id,
                    conversation_file_path="/home/dev/.claude/projects/fuel/1.jsonl",
                    bullet_points=["Added search endpoint"],
                    num_exchanges=4,
                    num_tool_usages=7,
                    num_tokens=1200,
                )
            )
            await uow.commit()

        async with uow_factory() as uow:
            detail = await uow.conversations.get_by_activity_id(log.id)

        assert detail is not None
        assert detail.bullet_points == ["Added search endpoint"]
        assert detail.num_tool_usages == 7

    @pytest.mark.asyncio
    async def test_conversation_counts_checked_by_store(
        self, session_factory: async_sessionmaker[AsyncSession], uow_factory
    ) -> None:
        log = await _create_log(uow_factory, ActivityType.CLAUDE_CODE, datetime(2026, 1, 1))

        with pytest.raises(IntegrityError):
            async with session_factory() as session:
                session.add(
                    ConversationModel(
                        activity_id=log.id,
                        conversation_file_path="/tmp/c.jsonl",
                        num_tokens=-5,
                    )
                )
                await session.commit()

    @pytest.mark.asyncio
    async def test_checkout_and_hook_stores(self, uow_factory) -> None:
        repo = await _create_repo(uow_factory)
        checkout_log = await _create_log(uow_factory, ActivityType.GIT_CHECKOUT, datetime(2026, 1, 1))
        hook_log = await _create_log(uow_factory, ActivityType.GIT_HOOK_INSTALL, datetime(2026, 1, 1))

        async with uow_factory() as uow:
            await uow.git_checkouts.create(
                CheckoutDetail(
                    activity_id=checkout_log.id,
                    repo_id=repo.id,
                    timestamp="2026-01-01T00:00:00Z",
                    prev_head="aaa",
                    new_head="bbb",
                    prev_branch="main",
                    new_branch="feature/search",
                    repo_path=repo.local_repo_path,
                    repo_name=repo.name,
                )
            )
            await uow.git_hooks.create(
                HookInstallDetail(
                    activity_id=hook_log.id,
                    repo_id=repo.id,
                    hook_type="post-commit",
                    installation_timestamp=datetime(2026, 1, 1),
                    repo_path=repo.local_repo_path,
                    repo_name=repo.name,
                )
            )
            await uow.commit()

        async with uow_factory() as uow:
            checkout = await uow.git_checkouts.get_by_activity_id(checkout_log.id)
            hooks = await uow.git_hooks.get_for_repo(repo.id)

        assert checkout is not None
        assert checkout.new_branch == "feature/search"
        assert [h.hook_type for h in hooks] == ["post-commit"]


class TestConnectedRepoStore:
    @pytest.mark.asyncio
    async def test_create_and_lookup(self, uow_factory) -> None:
        repo = await _create_repo(uow_factory, "/src/fuel")

        async with uow_factory() as uow:
            by_path = await uow.repos.get_by_path("/src/fuel")
            missing = await uow.repos.get_by_path("/src/other")

        assert by_path is not None
        assert by_path.id == repo.id
        assert missing is None

    @pytest.mark.asyncio
    async def test_active_excludes_inactive(self, uow_factory) -> None:
        active = await _create_repo(uow_factory, "/src/a")
        async with uow_factory() as uow:
            await uow.repos.create(
                ConnectedRepo(name="old", local_repo_path="/src/b", is_active=False)
            )
            await uow.commit()

        async with uow_factory() as uow:
            all_repos = await uow.repos.get_all()
            active_repos = await uow.repos.get_active()

        assert len(all_repos) == 2
        assert [r.id for r in active_repos] == [active.id]

    @pytest.mark.asyncio
    async def test_delete(self, uow_factory) -> None:
        repo = await _create_repo(uow_factory)

        async with uow_factory() as uow:
            assert await uow.repos.delete(repo.id) is True
            assert await uow.repos.delete(repo.id) is False
            await uow.commit()
