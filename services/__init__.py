from .config_utils import (
    create_basic_config,
    create_engineering_config,
    create_executive_config,
    estimate_generation_time,
    validate_config,
)
from .script_generator import ScriptGenerator
from .templates import TemplateRegistry, default_registry

__all__ = [
    "ScriptGenerator",
    "TemplateRegistry",
    "default_registry",
    "validate_config",
    "create_basic_config",
    "create_engineering_config",
    "create_executive_config",
    "estimate_generation_time",
]
