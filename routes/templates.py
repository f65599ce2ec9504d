"""Read-only template API."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from models.template import Template, TemplateType
from routes.dependencies import get_registry
from services.errors import TemplateNotFoundError
from services.templates import TemplateRegistry

router = APIRouter(tags=["templates"])
logger = logging.getLogger(__name__)


@router.get("/templates", response_model=list[TemplateType])
def list_templates(registry: TemplateRegistry = Depends(get_registry)) -> list[TemplateType]:
    return registry.get_available_templates()


@router.get("/templates/{template_type}", response_model=Template)
def read_template(
    template_type: TemplateType,
    registry: TemplateRegistry = Depends(get_registry),
) -> Template:
    try:
        return registry.get_template(template_type)
    except TemplateNotFoundError as exc:
        logger.info("[templates] %s", exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
