"""Domain errors raised by the template engine and services.

Variable problems (missing or invalid values) are reported as data in a
``ValidationReport``; the exceptions below mark conditions that abort a
single generate/validate call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from template_generator.schemas.generation import ValidationIssue


class TemplateGeneratorError(Exception):
    """Base class for all template generator errors."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class TemplateNotFoundError(TemplateGeneratorError):
    """Template is missing, soft-deleted or private.

    The three cases are indistinguishable on purpose so private templates
    do not leak their existence.
    """

    def __init__(self, template_id: str) -> None:
        super().__init__("Template not found", details={"template_id": template_id})
        self.template_id = template_id


class TemplateSyntaxError(TemplateGeneratorError):
    """Malformed placeholder syntax in a template body."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(
            f"{message} at line {line}, column {column}",
            details={"line": line, "column": column},
        )
        self.line = line
        self.column = column


class OutputStructureError(TemplateGeneratorError):
    """Rendered text is not a minimally valid Compose document."""


class VariableValidationError(TemplateGeneratorError):
    """Caller variables failed validation; carries every collected error."""

    def __init__(self, errors: list[ValidationIssue]) -> None:
        super().__init__("Variable validation failed", details=errors)
        self.errors = errors


class TemplateTooLargeError(TemplateGeneratorError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Template body is {size} bytes, limit is {limit}",
            details={"size": size, "limit": limit},
        )
