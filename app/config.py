"""Environment-driven settings. `.env` beside the project root is loaded first."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    template_dir: Path | None = None       # extra templates registered over the built-ins
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


def _split_origins(raw: str) -> list[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def get_settings() -> Settings:
    template_dir = os.environ.get("SCRIPT_ENGINE_TEMPLATE_DIR", "").strip()
    return Settings(
        log_level=os.environ.get("SCRIPT_ENGINE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL,
        template_dir=Path(template_dir) if template_dir else None,
        cors_origins=_split_origins(os.environ.get("SCRIPT_ENGINE_CORS_ORIGINS", "*")),
    )
