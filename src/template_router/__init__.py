# src/template_router/__init__.py
"""Template router: renders reverse-proxy config from route state."""

__version__ = "0.1.0"
