"""Placeholder renderer — substitutes ``{{ name }}`` tokens in a template body.

Only names declared in the template's variable specs are substituted; any
other ``{{ ... }}`` span is copied through unchanged. Values are inserted as
plain text with no YAML escaping.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from template_generator.exceptions import TemplateSyntaxError

if TYPE_CHECKING:
    from template_generator.schemas.template import VariableSpec

OPEN, CLOSE = "{{", "}}"
PLACEHOLDER_RE = re.compile(r"\{\{\s*([a-zA-Z][a-zA-Z0-9_]*)\s*\}\}")


def _position(text: str, index: int) -> tuple[int, int]:
    line = text.count("\n", 0, index) + 1
    column = index - (text.rfind("\n", 0, index) + 1) + 1
    return line, column


def _check_delimiters(body: str) -> None:
    """Raise TemplateSyntaxError on an opening ``{{`` with no matching ``}}``."""
    pos = 0
    while (start := body.find(OPEN, pos)) != -1:
        end = body.find(CLOSE, start + len(OPEN))
        if end == -1 or body.find(OPEN, start + len(OPEN), end) != -1:
            line, column = _position(body, start)
            raise TemplateSyntaxError("Unterminated placeholder", line, column)
        pos = end + len(CLOSE)


def to_text(value: Any) -> str:
    """Canonical textual form of a JSON value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # 8080.0 should render as a port, not a float
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def render_template(
    body: str, specs: Sequence[VariableSpec], variables: Mapping[str, Any]
) -> str:
    """Render *body* with *variables* overlaid on the specs' default values.

    Callers validate *variables* first; missing required values are not
    re-checked here and render as empty text.
    """
    _check_delimiters(body)

    declared = {spec.name for spec in specs}
    values = {spec.name: spec.default_value for spec in specs if spec.default_value is not None}
    values.update((name, value) for name, value in variables.items() if name in declared)

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in declared:
            return match.group(0)
        return to_text(values.get(name))

    return PLACEHOLDER_RE.sub(_substitute, body)


def check_template_syntax(body: str, specs: Sequence[VariableSpec] = ()) -> None:
    """Render with no variables so that only placeholder syntax can fail."""
    render_template(body, specs, {})
