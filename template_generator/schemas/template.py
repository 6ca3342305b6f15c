"""Template request/response schemas."""

import json
import re
from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from template_generator.services.variable_validator import check_value

VARIABLE_NAME_PATTERN = r"^[a-zA-Z][a-zA-Z0-9_]*$"
CATEGORY_PATTERN = r"^(web|database|messaging|monitoring|development|other)$"

# API payloads use camelCase keys (templateBody, defaultValue, isValid ...)
_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class VariableType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class VariableValidation(BaseModel):
    """Constraints for a variable; which ones apply depends on its type."""

    model_config = {**_CAMEL, "extra": "forbid"}

    # string
    pattern: str | None = None
    min_length: int | None = Field(None, ge=0)
    max_length: int | None = Field(None, ge=1)
    enum: list[str] | None = Field(None, min_length=1)
    # number
    minimum: float | None = None
    maximum: float | None = None

    @field_validator("pattern")
    @classmethod
    def pattern_compiles(cls, v: str | None) -> str | None:
        if v is not None:
            try:
                re.compile(v)
            except re.error as exc:
                raise ValueError(f"invalid regular expression: {exc}") from exc
        return v


class VariableSpec(BaseModel):
    model_config = {**_CAMEL, "extra": "forbid"}

    name: str = Field(..., pattern=VARIABLE_NAME_PATTERN, max_length=50)
    type: VariableType = VariableType.STRING
    description: str = ""
    required: bool = False
    default_value: Any = None
    validation: VariableValidation | None = None

    @model_validator(mode="after")
    def default_matches_type(self) -> "VariableSpec":
        if self.default_value is not None:
            reason = check_value(self, self.default_value)
            if reason:
                raise ValueError(f"defaultValue for '{self.name}' {reason}")
        return self


def _unique_names(specs: list[VariableSpec]) -> list[VariableSpec]:
    seen: set[str] = set()
    for spec in specs:
        if spec.name in seen:
            raise ValueError(f"duplicate variable name '{spec.name}'")
        seen.add(spec.name)
    return specs


def _parse_variables(v: Any) -> Any:
    if isinstance(v, str):
        return json.loads(v)
    return v


# Names unique within a template
VariableList = Annotated[list[VariableSpec], AfterValidator(_unique_names)]
# Stored as a JSON string on the ORM row
StoredVariables = Annotated[list[VariableSpec], BeforeValidator(_parse_variables)]


class TemplateCreate(BaseModel):
    model_config = _CAMEL

    name: str = Field(..., min_length=3, max_length=100)
    description: str = ""
    category: str = Field("other", pattern=CATEGORY_PATTERN)
    template_body: str = Field(..., min_length=1)
    variables: VariableList = []
    is_public: bool = True
    created_by: str | None = Field(None, max_length=128)


class TemplateUpdate(BaseModel):
    model_config = _CAMEL

    name: str | None = Field(None, min_length=3, max_length=100)
    description: str | None = None
    category: str | None = Field(None, pattern=CATEGORY_PATTERN)
    template_body: str | None = Field(None, min_length=1)
    variables: VariableList | None = None
    is_public: bool | None = None


class TemplateSummary(BaseModel):
    model_config = {**_CAMEL, "from_attributes": True}

    id: str
    name: str
    description: str
    category: str
    download_count: int
    rating_average: float
    created_at: datetime


class TemplateResponse(BaseModel):
    model_config = {**_CAMEL, "from_attributes": True}

    id: str
    name: str
    description: str
    category: str
    template_body: str
    variables: StoredVariables
    is_public: bool
    created_by: str | None
    download_count: int
    last_used_at: datetime | None
    rating_average: float
    rating_count: int
    created_at: datetime
    updated_at: datetime


class TemplateDocument(BaseModel):
    """The fields of a stored template that generation needs."""

    model_config = {**_CAMEL, "from_attributes": True}

    id: str
    template_body: str
    variables: StoredVariables = []


class TemplateRate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
