# src/template_router/commands/route/__init__.py

"""Route management commands for the template router."""

from .app import add, app, remove

__all__ = [
    "add",
    "app",
    "remove",
]
