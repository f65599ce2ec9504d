"""Script generation API."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from models.config import ScriptGenerationConfig
from models.github import PRAggregate
from models.script import ScriptGenerationResult
from routes.dependencies import get_registry
from services.config_utils import estimate_generation_time, validate_config
from services.script_generator import ScriptGenerator
from services.templates import TemplateRegistry

router = APIRouter(tags=["scripts"])
logger = logging.getLogger(__name__)


class ScriptRequest(BaseModel):
    pull_request: PRAggregate
    config: ScriptGenerationConfig


class ConfigValidationResponse(BaseModel):
    is_valid: bool
    errors: list[str]
    estimated_generation_ms: int


@router.post("/scripts/validate", response_model=ConfigValidationResponse)
def validate_script_config(config: ScriptGenerationConfig) -> ConfigValidationResponse:
    validation = validate_config(config)
    return ConfigValidationResponse(
        is_valid=validation.is_valid,
        errors=validation.errors,
        estimated_generation_ms=estimate_generation_time(config),
    )


@router.post("/scripts", response_model=None)
async def create_script(
    body: ScriptRequest,
    registry: TemplateRegistry = Depends(get_registry),
) -> ScriptGenerationResult:
    """Generate a script. Configs rejected by validate_config return 422 with the error list."""
    validation = validate_config(body.config)
    if not validation.is_valid:
        logger.info("[scripts] Rejected config: %s", "; ".join(validation.errors))
        raise HTTPException(status_code=422, detail=validation.errors)

    logger.info(
        "[scripts] POST /api/scripts for PR #%s (%s)",
        body.pull_request.pull_request.number,
        body.config.template_type.value,
    )
    result = await ScriptGenerator(registry).generate_script(body.pull_request, body.config)
    if not result.success:
        logger.warning("[scripts] Generation failed: %s", "; ".join(result.errors))
    return result
