import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.logging_utils import setup_logging
from models.script import SCRIPT_VERSION
from routes.scripts import router as scripts_router
from routes.templates import router as templates_router
from services.templates import TemplateRegistry, default_registry

logger = logging.getLogger(__name__)


def build_registry(settings: Settings) -> TemplateRegistry:
    registry = default_registry()
    if settings.template_dir is not None:
        registry.load_directory(settings.template_dir)
    return registry


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    application = FastAPI(title="PR Video Script Engine", version=SCRIPT_VERSION)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.state.registry = build_registry(settings)
    application.include_router(templates_router, prefix="/api")
    application.include_router(scripts_router, prefix="/api")

    @application.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info(
        "[main] Registered templates: %s",
        ", ".join(t.value for t in application.state.registry.get_available_templates()),
    )
    return application


app = create_app()
