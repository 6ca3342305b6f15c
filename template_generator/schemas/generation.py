"""Generate/validate request and response schemas."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class ErrorType(StrEnum):
    MISSING_VARIABLES = "missing_variables"
    INVALID_VARIABLE = "invalid_variable"
    TEMPLATE_COMPILATION = "template_compilation"


class ValidationIssue(BaseModel):
    type: ErrorType
    message: str
    details: Any = None


class ValidationReport(BaseModel):
    model_config = _CAMEL

    is_valid: bool = True
    errors: list[ValidationIssue] = Field(default_factory=list)

    def add(self, error_type: ErrorType, message: str, details: Any = None) -> None:
        self.errors.append(ValidationIssue(type=error_type, message=message, details=details))
        self.is_valid = False


class RenderResult(BaseModel):
    """Rendered Compose text plus the outcome of the structural check."""

    model_config = _CAMEL

    docker_compose: str
    is_valid: bool = True


class GenerateRequest(BaseModel):
    model_config = {"extra": "forbid"}

    variables: dict[str, Any] = {}


class GenerateResponse(BaseModel):
    model_config = _CAMEL

    docker_compose: str
