# tests/conftest.py
"""Shared fixtures for template router tests."""

from pathlib import Path

import pytest

from .fakes import FakeReloader

HAPROXY_TEMPLATE = """\
global
  daemon
{% if default_certificate %}
  # default cert {{ default_certificate }}
{% endif %}
{% for name, unit in state.items() | sort %}
backend be_{{ name }}
{% for key, cfg in unit.service_alias_configs.items() | sort %}
  # route {{ key }} host {{ cfg.host }}{{ cfg.path }}
{% endfor %}
{% for id, ep in unit.endpoint_table.items() | sort %}
  server {{ id }} {{ ep.ip }}:{{ ep.port }}
{% endfor %}
{% endfor %}
"""


@pytest.fixture
def reloader():
    return FakeReloader()


@pytest.fixture
def router_config(tmp_path):
    """Config rooted in tmp_path with one haproxy template."""
    from template_router.config import Config

    template = tmp_path / "templates" / "haproxy.config.j2"
    template.parent.mkdir()
    template.write_text(HAPROXY_TEMPLATE)

    return Config(
        state_dir=tmp_path / "router",
        reload_script=tmp_path / "reload.sh",
        templates={tmp_path / "out" / "haproxy.config": template},
        default_certificate="",
        default_certificate_file=None,
    )


@pytest.fixture
def output_path(router_config) -> Path:
    return next(iter(router_config.templates))


@pytest.fixture
def config_file(tmp_path, router_config, output_path) -> Path:
    """YAML config file equivalent to router_config."""
    path = tmp_path / "router.yaml"
    path.write_text(
        f"state_dir: {router_config.state_dir}\n"
        f"reload_script: {router_config.reload_script}\n"
        "templates:\n"
        f"  {output_path}: {router_config.templates[output_path]}\n"
    )
    return path
