"""SQLAlchemy implementation of the assistant conversation detail repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.activity import ConversationDetail
from infrastructure.database.models import ConversationModel


class SQLAlchemyConversationRepository:
    """SQLAlchemy implementation of IConversationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_activity_id(self, activity_id: UUID) -> ConversationDetail | None:
        stmt = select(ConversationModel).where(ConversationModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, detail: ConversationDetail) -> ConversationDetail:
        model = self._to_model(detail)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, activity_id: UUID) -> bool:
        stmt = delete(ConversationModel).where(ConversationModel.activity_id == activity_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined, no-any-return]

    def _to_entity(self, model: ConversationModel) -> ConversationDetail:
        """Convert ORM model to domain entity."""
        return ConversationDetail(
            id=model.id,
            activity_id=model.activity_id,
            project_directory_name=model.project_directory_name,
            conversation_file_path=model.conversation_file_path,
            raw_jsonl=model.raw_jsonl,
            parsed_content=model.parsed_content,
            bullet_points=model.bullet_points,
            num_exchanges=model.num_exchanges,
            num_tool_usages=model.num_tool_usages,
            num_tokens=model.num_tokens,
            started_at=model.started_at,
            ended_at=model.ended_at,
            metadata=model.metadata_,
        )

    def _to_model(self, entity: ConversationDetail) -> ConversationModel:
        """Convert domain entity to ORM model."""
        return ConversationModel(
            id=entity.id,
            activity_id=entity.activity_id,
            project_directory_name=entity.project_directory_name,
            conversation_file_path=entity.conversation_file_path,
            raw_jsonl=entity.raw_jsonl,
            parsed_content=entity.parsed_content,
            bullet_points=entity.bullet_points,
            num_exchanges=entity.num_exchanges,
            num_tool_usages=entity.num_tool_usages,
            num_tokens=entity.num_tokens,
            started_at=entity.started_at,
            ended_at=entity.ended_at,
            metadata_=entity.metadata,
        )
