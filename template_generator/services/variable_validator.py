"""Variable validator — checks a caller's variable map against a template's specs.

Problems are collected into a ``ValidationReport`` rather than raised, so a
caller sees every bad variable in one pass.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from template_generator.schemas.generation import ErrorType, ValidationReport
from template_generator.services.values import classify, describe

if TYPE_CHECKING:
    from template_generator.schemas.template import VariableSpec, VariableValidation


def _check_string(value: str, rules: VariableValidation) -> str | None:
    if rules.pattern is not None:
        try:
            matched = re.fullmatch(rules.pattern, value)
        except re.error:
            return f"cannot be checked, pattern {rules.pattern!r} is invalid"
        if matched is None:
            return f"does not match pattern {rules.pattern!r}"
    if rules.min_length is not None and len(value) < rules.min_length:
        return f"must be at least {rules.min_length} characters long"
    if rules.max_length is not None and len(value) > rules.max_length:
        return f"must be at most {rules.max_length} characters long"
    if rules.enum is not None and value not in rules.enum:
        return f"must be one of: {', '.join(rules.enum)}"
    return None


def _bound(limit: float) -> str:
    return str(int(limit)) if limit.is_integer() else repr(limit)


def _check_number(value: float, rules: VariableValidation) -> str | None:
    if rules.minimum is not None and value < rules.minimum:
        return f"must be >= {_bound(rules.minimum)}"
    if rules.maximum is not None and value > rules.maximum:
        return f"must be <= {_bound(rules.maximum)}"
    return None


# boolean, array and object variables are type-checked only
_CONSTRAINT_CHECKS: dict[str, Callable[[Any, VariableValidation], str | None]] = {
    "string": _check_string,
    "number": _check_number,
}


def check_value(spec: VariableSpec, value: Any) -> str | None:
    """Return why *value* does not satisfy *spec*, or None when it does."""
    kind = classify(value)
    if kind is None or kind.value != spec.type.value:
        return f"must be of type {spec.type.value}, got {describe(value)}"

    check = _CONSTRAINT_CHECKS.get(spec.type.value)
    if check is None or spec.validation is None:
        return None
    return check(value, spec.validation)


def validate_variables(
    specs: Sequence[VariableSpec], variables: Mapping[str, Any]
) -> ValidationReport:
    """Validate *variables* against *specs*. Never raises."""
    report = ValidationReport()

    # Defaults never satisfy a required variable
    missing = [spec.name for spec in specs if spec.required and spec.name not in variables]
    if missing:
        report.add(
            ErrorType.MISSING_VARIABLES,
            f"Missing required variables: {', '.join(missing)}",
            missing,
        )

    for spec in specs:
        if spec.name not in variables:
            continue
        reason = check_value(spec, variables[spec.name])
        if reason:
            report.add(
                ErrorType.INVALID_VARIABLE,
                f"Variable '{spec.name}' {reason}",
                {"variable": spec.name, "reason": reason},
            )

    return report
