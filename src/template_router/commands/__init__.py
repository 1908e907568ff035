# src/template_router/commands/__init__.py
"""Command topic modules for template-router CLI."""

from . import endpoints as endpoints
from . import route as route
from . import unit as unit
