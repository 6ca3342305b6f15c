"""Template service — CRUD, ratings and the disk → DB sync of bundled templates."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from template_generator.config import settings
from template_generator.exceptions import TemplateSyntaxError, TemplateTooLargeError
from template_generator.models.template import Template
from template_generator.schemas.template import (
    TemplateCreate,
    TemplateUpdate,
    VariableList,
    VariableSpec,
)
from template_generator.services.renderer import check_template_syntax
from template_generator.utils.frontmatter import split_frontmatter

logger = logging.getLogger(__name__)

_CATEGORIES = ("web", "database", "messaging", "monitoring", "development")
_variable_list = TypeAdapter(VariableList)


def _dump_variables(specs: list[VariableSpec]) -> str:
    return json.dumps(
        [spec.model_dump(mode="json", by_alias=True, exclude_none=True) for spec in specs]
    )


def _load_variables(tpl: Template) -> list[VariableSpec]:
    return _variable_list.validate_json(tpl.variables or "[]")


def check_body(body: str, specs: list[VariableSpec]) -> None:
    """Enforce the size limit and placeholder syntax of a template body."""
    size = len(body.encode("utf-8"))
    if size > settings.max_template_size:
        raise TemplateTooLargeError(size, settings.max_template_size)
    check_template_syntax(body, specs)


async def list_templates(db: AsyncSession, category: str | None = None) -> list[Template]:
    stmt = (
        select(Template)
        .where(Template.is_active.is_(True), Template.is_public.is_(True))
        .order_by(Template.category, Template.name)
    )
    if category:
        stmt = stmt.where(Template.category == category)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _get_active(db: AsyncSession, template_id: str) -> Template | None:
    tpl = await db.get(Template, template_id)
    if not tpl or not tpl.is_active:
        return None
    return tpl


async def get_template(db: AsyncSession, template_id: str) -> Template | None:
    """Public lookup; private and deleted templates look like missing ones."""
    tpl = await _get_active(db, template_id)
    if not tpl or not tpl.is_public:
        return None
    return tpl


async def create_template(db: AsyncSession, data: TemplateCreate) -> Template:
    check_body(data.template_body, data.variables)

    tpl = Template(
        id=uuid.uuid4().hex,
        name=data.name,
        description=data.description,
        category=data.category,
        template_body=data.template_body,
        variables=_dump_variables(data.variables),
        is_public=data.is_public,
        created_by=data.created_by,
    )
    db.add(tpl)
    await db.commit()
    await db.refresh(tpl)
    logger.info("Template created: %s", tpl.id)
    return tpl


async def update_template(
    db: AsyncSession, template_id: str, data: TemplateUpdate
) -> Template | None:
    tpl = await _get_active(db, template_id)
    if not tpl:
        return None

    if data.template_body is not None or data.variables is not None:
        body = data.template_body if data.template_body is not None else tpl.template_body
        specs = data.variables if data.variables is not None else _load_variables(tpl)
        check_body(body, specs)

    for field, value in data.model_dump(exclude_unset=True, exclude={"variables"}).items():
        if value is not None:
            setattr(tpl, field, value)
    if data.variables is not None:
        tpl.variables = _dump_variables(data.variables)

    await db.commit()
    await db.refresh(tpl)
    logger.info("Template updated: %s", template_id)
    return tpl


async def delete_template(db: AsyncSession, template_id: str) -> bool:
    """Soft delete: the row stays, flagged inactive."""
    tpl = await _get_active(db, template_id)
    if not tpl:
        return False

    tpl.is_active = False
    await db.commit()
    logger.info("Template deleted (soft delete): %s", template_id)
    return True


async def rate_template(db: AsyncSession, template_id: str, rating: int) -> Template | None:
    tpl = await get_template(db, template_id)
    if not tpl:
        return None

    total = tpl.rating_average * tpl.rating_count
    tpl.rating_count += 1
    tpl.rating_average = (total + rating) / tpl.rating_count

    await db.commit()
    await db.refresh(tpl)
    return tpl


# ── Disk → DB sync ─────────────────────────────────────────────────


def _infer_category(rel_path: Path) -> str:
    """Infer template category from directory name."""
    if len(rel_path.parts) > 1:
        cat = rel_path.parts[0].lower()
        if cat in _CATEGORIES:
            return cat
    return "other"


def _humanize_name(filename: str) -> str:
    """Convert a filename like 'postgres_stack.yml.tmpl' → 'Postgres Stack'."""
    name = filename.split(".", 1)[0]
    return name.replace("_", " ").replace("-", " ").title()


async def sync_templates_from_disk(db: AsyncSession) -> dict[str, list[str]]:
    """Scan the templates directory for *.yml.tmpl files and upsert into the DB.

    Files that are not UTF-8, or that have broken front matter, invalid
    variable specs or malformed placeholders, are skipped with a warning.
    Returns dict with 'created', 'updated' and 'skipped' lists of template IDs.
    """
    templates_dir = settings.templates_dir
    result: dict[str, list[str]] = {"created": [], "updated": [], "skipped": []}
    if not templates_dir.exists():
        return result

    for tmpl_file in sorted(templates_dir.rglob("*.yml.tmpl")):
        rel = tmpl_file.relative_to(templates_dir)
        # web/nginx.yml.tmpl → web/nginx
        tpl_id = rel.with_name(rel.name.split(".", 1)[0]).as_posix()

        try:
            meta, body = split_frontmatter(tmpl_file.read_text(encoding="utf-8"))
            specs = _variable_list.validate_python(meta.get("variables") or [])
            check_body(body, specs)
        except (
            UnicodeDecodeError,
            yaml.YAMLError,
            ValidationError,
            TemplateSyntaxError,
            TemplateTooLargeError,
        ) as exc:
            logger.warning("Skipping template file %s: %s", rel, exc)
            result["skipped"].append(tpl_id)
            continue

        category = str(meta.get("category") or "")
        if category not in (*_CATEGORIES, "other"):
            category = _infer_category(rel)
        fields = {
            "name": str(meta.get("name") or _humanize_name(tmpl_file.name)),
            "description": str(meta.get("description") or ""),
            "category": category,
            "template_body": body,
            "variables": _dump_variables(specs),
        }

        existing = await db.get(Template, tpl_id)
        if existing:
            changed = [key for key, value in fields.items() if getattr(existing, key) != value]
            for key in changed:
                setattr(existing, key, fields[key])
            if changed:
                result["updated"].append(tpl_id)
        else:
            db.add(Template(id=tpl_id, created_by="bundled", **fields))
            result["created"].append(tpl_id)

    if result["created"] or result["updated"]:
        await db.commit()

    if result["created"]:
        logger.info("Synced %d new templates from disk: %s", len(result["created"]), result["created"])
    if result["updated"]:
        logger.info("Updated %d templates from disk: %s", len(result["updated"]), result["updated"])

    return result
