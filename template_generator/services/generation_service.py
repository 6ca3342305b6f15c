"""Generation service — validate variables, render, check the output.

``generate`` produces a Compose file and records usage; ``validate`` runs the
same checks and reports problems without side effects.
"""

from __future__ import annotations

import logging
from typing import Any

from template_generator.adapters.base import TemplateStore
from template_generator.config import Settings
from template_generator.exceptions import (
    OutputStructureError,
    TemplateNotFoundError,
    TemplateSyntaxError,
    VariableValidationError,
)
from template_generator.schemas.generation import ErrorType, RenderResult, ValidationReport
from template_generator.schemas.template import TemplateDocument
from template_generator.services.compose_validator import validate_compose
from template_generator.services.renderer import render_template
from template_generator.services.usage_recorder import UsageRecorder
from template_generator.services.variable_validator import validate_variables

logger = logging.getLogger(__name__)


class GenerationService:
    def __init__(self, store: TemplateStore, settings: Settings, usage: UsageRecorder) -> None:
        self.store = store
        self.settings = settings
        self.usage = usage

    async def _load(self, template_id: str) -> TemplateDocument:
        template = await self.store.find(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def _render(self, template: TemplateDocument, variables: dict[str, Any]) -> str:
        try:
            return render_template(template.template_body, template.variables, variables)
        except TemplateSyntaxError as exc:
            # Bodies are syntax-checked on save, so this means a corrupt row
            logger.error("Stored template %s failed to render: %s", template.id, exc.message)
            raise

    async def generate(self, template_id: str, variables: dict[str, Any]) -> RenderResult:
        """Render a Compose file from *template_id*.

        Raises TemplateNotFoundError, VariableValidationError (nothing is
        rendered), TemplateSyntaxError or OutputStructureError (the rendered
        text is discarded).
        """
        template = await self._load(template_id)

        report = validate_variables(template.variables, variables)
        if not report.is_valid:
            raise VariableValidationError(report.errors)

        rendered = self._render(template, variables)
        validate_compose(rendered)

        if self.settings.usage_tracking_enabled:
            self.usage.record(self.store, template_id)

        logger.info("Generated compose file from template %s", template_id)
        return RenderResult(docker_compose=rendered, is_valid=True)

    async def validate(self, template_id: str, variables: dict[str, Any]) -> ValidationReport:
        """Report every variable problem; render only when the variables pass."""
        template = await self._load(template_id)

        report = validate_variables(template.variables, variables)
        if not report.is_valid:
            return report

        try:
            validate_compose(self._render(template, variables))
        except (TemplateSyntaxError, OutputStructureError) as exc:
            report.add(ErrorType.TEMPLATE_COMPILATION, exc.message, exc.details)
        return report
