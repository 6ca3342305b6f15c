"""Template CRUD + generate/validate endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from template_generator.database import get_db
from template_generator.dependencies import get_generation_service
from template_generator.exceptions import (
    OutputStructureError,
    TemplateNotFoundError,
    TemplateSyntaxError,
    TemplateTooLargeError,
    VariableValidationError,
)
from template_generator.schemas.generation import (
    GenerateRequest,
    GenerateResponse,
    ValidationReport,
)
from template_generator.schemas.template import (
    TemplateCreate,
    TemplateRate,
    TemplateResponse,
    TemplateSummary,
    TemplateUpdate,
)
from template_generator.services import template_service
from template_generator.services.generation_service import GenerationService

router = APIRouter()


def _body_error(exc: TemplateSyntaxError | TemplateTooLargeError) -> HTTPException:
    status = 413 if isinstance(exc, TemplateTooLargeError) else 400
    return HTTPException(status_code=status, detail={"message": exc.message, "details": exc.details})


@router.get("/", response_model=list[TemplateSummary])
async def list_templates(category: str | None = None, db: AsyncSession = Depends(get_db)):
    return await template_service.list_templates(db, category=category)


@router.post("/", response_model=TemplateResponse, status_code=201)
async def create_template(data: TemplateCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await template_service.create_template(db, data)
    except (TemplateSyntaxError, TemplateTooLargeError) as e:
        raise _body_error(e)


@router.post("/sync", status_code=200)
async def sync_templates(db: AsyncSession = Depends(get_db)):
    """Re-scan the templates directory and upsert any .yml.tmpl files into the DB."""
    result = await template_service.sync_templates_from_disk(db)
    return {
        **result,
        "message": f"{len(result['created'])} created, {len(result['updated'])} updated, "
        f"{len(result['skipped'])} skipped",
    }


@router.post("/{template_id:path}/generate", response_model=GenerateResponse)
async def generate_compose(
    template_id: str,
    body: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
):
    try:
        result = await service.generate(template_id, body.variables)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")
    except VariableValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "message": e.message,
                "errors": [err.model_dump(mode="json") for err in e.errors],
            },
        )
    except (TemplateSyntaxError, OutputStructureError) as e:
        raise HTTPException(status_code=400, detail={"message": e.message, "details": e.details})

    return GenerateResponse(docker_compose=result.docker_compose)


@router.post("/{template_id:path}/validate", response_model=ValidationReport)
async def validate_variables(
    template_id: str,
    body: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Always 200 with a report; an invalid report is not an HTTP error."""
    try:
        return await service.validate(template_id, body.variables)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")


@router.post("/{template_id:path}/rate", response_model=TemplateResponse)
async def rate_template(
    template_id: str, body: TemplateRate, db: AsyncSession = Depends(get_db)
):
    tpl = await template_service.rate_template(db, template_id, body.rating)
    if not tpl:
        raise HTTPException(status_code=404, detail="Template not found")
    return tpl


@router.get("/{template_id:path}", response_model=TemplateResponse)
async def get_template(template_id: str, db: AsyncSession = Depends(get_db)):
    tpl = await template_service.get_template(db, template_id)
    if not tpl:
        raise HTTPException(status_code=404, detail="Template not found")
    return tpl


@router.patch("/{template_id:path}", response_model=TemplateResponse)
async def update_template(
    template_id: str, data: TemplateUpdate, db: AsyncSession = Depends(get_db)
):
    try:
        tpl = await template_service.update_template(db, template_id, data)
    except (TemplateSyntaxError, TemplateTooLargeError) as e:
        raise _body_error(e)
    if not tpl:
        raise HTTPException(status_code=404, detail="Template not found")
    return tpl


@router.delete("/{template_id:path}", status_code=204)
async def delete_template(template_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await template_service.delete_template(db, template_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Template not found")
