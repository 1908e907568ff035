# src/template_router/templates.py
"""Rendering proxy config files from Jinja2 templates.

Templates receive two variables:
    state               - mapping of service unit name to ServiceUnit
    default_certificate - path of the default certificate, or ""
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import jinja2

from .errors import TemplateError
from .models import ServiceUnit

logger = logging.getLogger(__name__)


def _environment(search_path: Path | None = None) -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(search_path)) if search_path else None,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )


@dataclass
class ConfigTemplate:
    """A template paired with the config file it renders to."""

    template: jinja2.Template
    output_path: Path

    @classmethod
    def from_file(cls, template_path: Path, output_path: Path) -> ConfigTemplate:
        """Load a template from disk.

        Raises:
            TemplateError: If the template is missing or does not parse.
        """
        template_path = Path(template_path)
        if not template_path.exists():
            raise TemplateError(f"Template not found: {template_path}")
        env = _environment(template_path.parent)
        try:
            template = env.get_template(template_path.name)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to load template {template_path}: {e}") from e
        return cls(template=template, output_path=Path(output_path))

    @classmethod
    def from_string(cls, source: str, output_path: Path) -> ConfigTemplate:
        try:
            template = _environment().from_string(source)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to parse template for {output_path}: {e}") from e
        return cls(template=template, output_path=Path(output_path))

    def render(self, state: Mapping[str, ServiceUnit], default_certificate: str = "") -> str:
        try:
            return self.template.render(state=state, default_certificate=default_certificate)
        except jinja2.TemplateError as e:
            logger.error("Error executing template for file %s: %s", self.output_path, e)
            raise TemplateError(f"Error executing template for {self.output_path}: {e}") from e

    def write(self, state: Mapping[str, ServiceUnit], default_certificate: str = "") -> Path:
        """Render and overwrite the output file."""
        rendered = self.render(state, default_certificate)
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(rendered)
        except OSError as e:
            logger.error("Error creating config file %s: %s", self.output_path, e)
            raise TemplateError(f"Error writing config file {self.output_path}: {e}") from e
        logger.debug("Rendered %s", self.output_path)
        return self.output_path


def load_templates(templates: Mapping[Path, Path]) -> list[ConfigTemplate]:
    """Load templates from a mapping of output path to template path."""
    return [ConfigTemplate.from_file(tpl, out) for out, tpl in templates.items()]
