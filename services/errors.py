"""Exception types raised by the script engine."""


class ScriptEngineError(Exception):
    """Base class for engine failures."""


class ConfigurationError(ScriptEngineError, ValueError):
    """A configuration object is invalid and cannot be defaulted."""


class TemplateNotFoundError(ConfigurationError, KeyError):
    def __init__(self, template_type: str) -> None:
        super().__init__(f"Template not found: {template_type}")
        self.template_type = template_type

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class TemplateLoadError(ConfigurationError):
    """A template data file could not be parsed into a Template."""
