"""
Template registry.

Templates are plain JSON documents validated into frozen pydantic models. The
built-in set lives in ``services/template_data``; deployments can register extra
directories on top (see ``SCRIPT_ENGINE_TEMPLATE_DIR``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from models.template import Template, TemplateType
from services.errors import TemplateLoadError, TemplateNotFoundError

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATE_DIR = Path(__file__).parent / "template_data"


def load_template_file(path: Path) -> Template:
    try:
        return Template.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise TemplateLoadError(f"Failed to load template {path.name}: {exc}") from exc


class TemplateRegistry:
    """Holds one template per TemplateType. Adding a template replaces any earlier one of that type."""

    def __init__(self, templates: list[Template] | None = None) -> None:
        self._templates: dict[TemplateType, Template] = {}
        for template in templates or []:
            self.add_template(template)

    def add_template(self, template: Template) -> None:
        if template.type in self._templates:
            logger.info("[templates] Replacing %s template with %s", template.type.value, template.id)
        self._templates[template.type] = template

    def get_template(self, template_type: TemplateType) -> Template:
        try:
            return self._templates[template_type]
        except KeyError:
            raise TemplateNotFoundError(template_type.value) from None

    def get_available_templates(self) -> list[TemplateType]:
        return list(self._templates)

    def select_template(
        self,
        template_type: TemplateType,
        overrides: dict[str, Any] | None = None,
    ) -> Template:
        """Registered template, or a copy with top-level fields replaced (the registry copy is untouched)."""
        template = self.get_template(template_type)
        if not overrides:
            return template
        merged = template.model_dump()
        merged.update(overrides)
        return Template.model_validate(merged)

    def load_directory(self, directory: str | Path) -> int:
        """Register every ``*.json`` file in the directory, in name order. Returns the count loaded."""
        path = Path(directory)
        if not path.is_dir():
            raise TemplateLoadError(f"Template directory not found: {path}")
        files = sorted(path.glob("*.json"))
        for file in files:
            self.add_template(load_template_file(file))
        logger.info("[templates] Loaded %d template(s) from %s", len(files), path)
        return len(files)

    @classmethod
    def from_directory(cls, directory: str | Path) -> "TemplateRegistry":
        registry = cls()
        registry.load_directory(directory)
        return registry


def default_registry() -> TemplateRegistry:
    """Fresh registry with the built-in summary, detailed and technical templates."""
    registry = TemplateRegistry()
    for name in ("summary", "detailed", "technical"):
        registry.add_template(load_template_file(BUILTIN_TEMPLATE_DIR / f"{name}.json"))
    return registry
