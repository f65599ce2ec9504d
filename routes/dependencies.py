from fastapi import Request

from services.templates import TemplateRegistry


def get_registry(request: Request) -> TemplateRegistry:
    """Registry built at startup and stored on app.state."""
    return request.app.state.registry
