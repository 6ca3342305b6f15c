"""Structural check for rendered Compose documents.

Deliberately shallow: the text must parse as YAML into a mapping with a
``version`` or ``services`` key. No Compose schema conformance is checked.
"""

from __future__ import annotations

import yaml

from template_generator.exceptions import OutputStructureError

TOP_LEVEL_KEYS = ("version", "services")


def validate_compose(text: str) -> bool:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        details = {"line": mark.line + 1, "column": mark.column + 1} if mark else None
        raise OutputStructureError(f"Generated output is not valid YAML: {exc}", details) from exc

    if not isinstance(document, dict):
        raise OutputStructureError(
            "Generated output must be a YAML mapping",
            {"root_type": type(document).__name__},
        )
    if not any(key in document for key in TOP_LEVEL_KEYS):
        raise OutputStructureError(
            "Generated output must define a 'version' or 'services' key",
            {"keys": sorted(str(key) for key in document)},
        )
    return True
