# tests/test_templates.py
"""Tests for config template rendering."""

import pytest

from template_router.errors import TemplateError
from template_router.models import Endpoint, RouteSpec
from template_router.state import RouterState
from template_router.templates import ConfigTemplate, load_templates


def populated_state():
    state = RouterState()
    state.create_service_unit("svc1")
    state.add_route("svc1", RouteSpec("ns", "web", "a.example.com", path="/api"))
    state.add_endpoints("svc1", [Endpoint("e1", "10.0.0.1", "8080")])
    return state


class TestConfigTemplate:
    """Test ConfigTemplate loading and rendering."""

    def test_render_receives_state_and_default_cert(self, tmp_path):
        tpl = ConfigTemplate.from_string(
            "{% for name, unit in state.items() %}{{ name }}"
            "{% for id, ep in unit.endpoint_table.items() %} {{ ep.ip }}:{{ ep.port }}"
            "{% endfor %}{% endfor %}|{{ default_certificate }}",
            tmp_path / "out.cfg",
        )

        rendered = tpl.render(populated_state().units, "/certs/default.pem")

        assert rendered == "svc1 10.0.0.1:8080|/certs/default.pem"

    def test_write_overwrites_output(self, tmp_path):
        output = tmp_path / "conf" / "out.cfg"
        output.parent.mkdir()
        output.write_text("stale")
        tpl = ConfigTemplate.from_string("units={{ state | length }}", output)

        tpl.write(populated_state().units)

        assert output.read_text() == "units=1"

    def test_from_file(self, tmp_path, router_config, output_path):
        template_path = router_config.templates[output_path]

        tpl = ConfigTemplate.from_file(template_path, output_path)
        rendered = tpl.render(populated_state().units, "")

        assert "backend be_svc1" in rendered
        assert "# route ns_web host a.example.com/api" in rendered
        assert "server e1 10.0.0.1:8080" in rendered
        assert "default cert" not in rendered

    def test_missing_template_file(self, tmp_path):
        with pytest.raises(TemplateError) as exc_info:
            ConfigTemplate.from_file(tmp_path / "missing.j2", tmp_path / "out")
        assert "Template not found" in str(exc_info.value)

    def test_syntax_error(self, tmp_path):
        with pytest.raises(TemplateError):
            ConfigTemplate.from_string("{% for x in %}", tmp_path / "out")

    def test_undefined_variable_fails_render(self, tmp_path):
        tpl = ConfigTemplate.from_string("{{ nope.attr }}", tmp_path / "out")

        with pytest.raises(TemplateError) as exc_info:
            tpl.render({}, "")

        assert "Error executing template" in str(exc_info.value)

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        tpl = ConfigTemplate.from_string("x", blocker / "out.cfg")

        with pytest.raises(TemplateError):
            tpl.write({})


class TestLoadTemplates:
    """Test load_templates."""

    def test_loads_each_pair(self, router_config, output_path):
        templates = load_templates(router_config.templates)

        assert len(templates) == 1
        assert templates[0].output_path == output_path
