# tests/test_config.py
"""Tests for config module - Config dataclass and YAML loading."""

from pathlib import Path

import pytest


class TestConfigDefaults:
    """Test Config dataclass default values."""

    def test_default_state_dir(self, monkeypatch):
        """Should default to /var/lib/containers/router."""
        monkeypatch.delenv("ROUTER_STATE_DIR", raising=False)
        from template_router.config import Config

        cfg = Config()
        assert cfg.state_dir == Path("/var/lib/containers/router")
        assert cfg.state_file == Path("/var/lib/containers/router/routes.json")
        assert cfg.cert_dir == Path("/var/lib/containers/router/certs")
        assert cfg.cacert_dir == Path("/var/lib/containers/router/cacerts")
        assert cfg.default_cert_dir == Path("/var/lib/containers/router/default-cert")

    def test_default_cert_dir_is_not_route_cert_dir(self, tmp_path):
        """The default certificate must not share a root with route certificates."""
        from template_router.config import Config

        cfg = Config(state_dir=tmp_path)
        assert cfg.default_cert_dir != cfg.cert_dir
        assert cfg.default_cert_dir != cfg.cacert_dir

    def test_state_dir_from_env(self, monkeypatch):
        monkeypatch.setenv("ROUTER_STATE_DIR", "/tmp/router")
        from template_router.config import Config

        assert Config().state_file == Path("/tmp/router/routes.json")

    def test_reload_script_from_env(self, monkeypatch):
        monkeypatch.setenv("RELOAD_SCRIPT", "/usr/bin/reload-nginx")
        from template_router.config import Config

        assert Config().reload_script == Path("/usr/bin/reload-nginx")

    def test_default_certificate_from_env(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_CERTIFICATE", "PEM")
        from template_router.config import Config

        assert Config().resolve_default_certificate() == "PEM"

    def test_no_default_certificate(self, monkeypatch):
        monkeypatch.delenv("DEFAULT_CERTIFICATE", raising=False)
        monkeypatch.delenv("DEFAULT_CERTIFICATE_PATH", raising=False)
        from template_router.config import Config

        assert Config().resolve_default_certificate() == ""


class TestDefaultCertificateFile:
    """Test reading the default certificate from a file."""

    def test_reads_file(self, tmp_path):
        from template_router.config import Config

        pem = tmp_path / "default.pem"
        pem.write_text("FILE PEM")
        cfg = Config(default_certificate="", default_certificate_file=pem)

        assert cfg.resolve_default_certificate() == "FILE PEM"

    def test_missing_file_raises(self, tmp_path):
        from template_router.config import Config
        from template_router.errors import CertificateError

        cfg = Config(default_certificate="", default_certificate_file=tmp_path / "missing")

        with pytest.raises(CertificateError):
            cfg.resolve_default_certificate()


class TestConfigValidate:
    """Test Config.validate method."""

    def test_missing_template_raises(self, tmp_path):
        from template_router.config import Config

        cfg = Config(templates={tmp_path / "out": tmp_path / "missing.j2"})

        with pytest.raises(SystemExit) as exc_info:
            cfg.validate()

        assert "Missing required files" in str(exc_info.value)

    def test_validate_with_all_files(self, router_config):
        router_config.validate()  # Should not raise


class TestConfigFromFile:
    """Test Config.from_file YAML loading."""

    def test_loads_values(self, tmp_path):
        from template_router.config import Config

        config_file = tmp_path / "router.yaml"
        config_file.write_text(
            f"""
state_dir: {tmp_path}/state
reload_script: /usr/local/bin/reload-haproxy
reload_timeout: 30
default_certificate_path: {tmp_path}/default.pem
default_cert_dir: {tmp_path}/wildcard
templates:
  {tmp_path}/haproxy.config: {tmp_path}/haproxy.config.j2
"""
        )

        cfg = Config.from_file(config_file)

        assert cfg.state_file == tmp_path / "state" / "routes.json"
        assert cfg.reload_script == Path("/usr/local/bin/reload-haproxy")
        assert cfg.reload_timeout == 30.0
        assert cfg.default_certificate_file == tmp_path / "default.pem"
        assert cfg.default_cert_dir == tmp_path / "wildcard"
        assert cfg.templates == {tmp_path / "haproxy.config": tmp_path / "haproxy.config.j2"}

    def test_empty_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ROUTER_STATE_DIR", raising=False)
        from template_router.config import Config

        config_file = tmp_path / "router.yaml"
        config_file.write_text("")

        cfg = Config.from_file(config_file)

        assert cfg.state_dir == Path("/var/lib/containers/router")
        assert cfg.templates == {}

    def test_missing_file_exits(self, tmp_path):
        from template_router.config import Config

        with pytest.raises(SystemExit) as exc_info:
            Config.from_file(tmp_path / "missing.yaml")

        assert "Config file not found" in str(exc_info.value)

    def test_invalid_yaml_exits(self, tmp_path):
        from template_router.config import Config

        config_file = tmp_path / "router.yaml"
        config_file.write_text("templates: [unclosed")

        with pytest.raises(SystemExit) as exc_info:
            Config.from_file(config_file)

        assert "Invalid config file" in str(exc_info.value)
