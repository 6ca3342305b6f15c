"""Front-matter helpers for bundled template files."""

from __future__ import annotations

import re
from typing import Any

import yaml

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n?(.*)", re.DOTALL)


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a template file into (metadata, body).

    Format::

        ---
        name: Nginx Web Server
        category: web
        variables:
          - name: image
            required: true
        ---
        version: '3.8'
        services: ...

    Files without a front-matter block return ``({}, content)``. A block that
    is not valid YAML raises ``yaml.YAMLError``.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}, content

    meta = yaml.safe_load(match.group(1)) or {}
    if not isinstance(meta, dict):
        raise yaml.YAMLError("front matter must be a mapping")
    return meta, match.group(2)
