"""JSON value kinds used to type-check caller variables."""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import Any


class ValueKind(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


def classify(value: Any) -> ValueKind | None:
    """Return the JSON kind of *value*, or None if it has none (e.g. NaN)."""
    if value is None:
        return ValueKind.NULL
    # bool is an int subclass; check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return None


def describe(value: Any) -> str:
    kind = classify(value)
    return kind.value if kind is not None else type(value).__name__
