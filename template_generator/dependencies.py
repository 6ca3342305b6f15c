"""FastAPI dependencies that wire the generation service together."""

from fastapi import Depends, Request

from template_generator.adapters.base import TemplateStore
from template_generator.adapters.sql_store import SqlTemplateStore
from template_generator.config import settings
from template_generator.database import async_session
from template_generator.services.generation_service import GenerationService


def get_template_store() -> TemplateStore:
    return SqlTemplateStore(async_session)


def get_generation_service(
    request: Request, store: TemplateStore = Depends(get_template_store)
) -> GenerationService:
    return GenerationService(store, settings, request.app.state.usage_recorder)
