"""SQLAlchemy-backed template store."""

from __future__ import annotations

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from template_generator.adapters.base import TemplateStore
from template_generator.models.template import Template
from template_generator.schemas.template import TemplateDocument


class SqlTemplateStore(TemplateStore):
    """Opens a fresh session per call so usage updates can outlive the request."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find(self, template_id: str) -> TemplateDocument | None:
        async with self._session_factory() as session:
            tpl = await session.get(Template, template_id)
            if not tpl or not tpl.is_active or not tpl.is_public:
                return None
            return TemplateDocument.model_validate(tpl)

    async def increment_usage(self, template_id: str) -> None:
        # Single UPDATE, no lock; concurrent generates may race
        stmt = (
            update(Template)
            .where(Template.id == template_id)
            .values(
                download_count=Template.download_count + 1,
                last_used_at=func.now(),
                updated_at=Template.updated_at,  # usage is not an edit
            )
        )
        async with self._session_factory() as session:
            await session.execute(stmt)
            await session.commit()
