# tests/commands/route/test_helpers.py
"""Tests for route command helpers."""

import pytest

from template_router.commands.route._helpers import build_route_spec, read_pem
from template_router.models import TLSTermination


class TestReadPem:
    """Test read_pem helper."""

    def test_none_is_empty(self):
        assert read_pem(None) == ""

    def test_reads_file(self, tmp_path):
        pem = tmp_path / "a.crt"
        pem.write_text("CERT")
        assert read_pem(pem) == "CERT"

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            read_pem(tmp_path / "missing.crt")
        assert "Cannot read" in str(exc_info.value)


class TestBuildRouteSpec:
    """Test build_route_spec helper."""

    def test_without_tls(self):
        route = build_route_spec("ns", "web", "a.example.com", path="/api")
        assert route.key == "ns_web"
        assert route.path == "/api"
        assert route.tls is None

    def test_edge_reads_pem_files(self, tmp_path):
        cert = tmp_path / "a.crt"
        key = tmp_path / "a.key"
        cert.write_text("CERT")
        key.write_text("KEY")

        route = build_route_spec(
            "ns", "web", "a.example.com", termination="edge", cert=cert, key=key
        )

        assert route.tls.termination is TLSTermination.EDGE
        assert route.tls.certificate == "CERT"
        assert route.tls.key == "KEY"
        assert route.tls.ca_certificate == ""

    def test_unknown_termination_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            build_route_spec("ns", "web", "a.example.com", termination="offload")
        assert "Unknown TLS termination" in str(exc_info.value)

    def test_none_termination_is_plain_route(self):
        route = build_route_spec("ns", "web", "a.example.com", termination="none")
        assert route.tls.termination is None

    def test_invalid_route_name_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            build_route_spec("ns", "my_web", "a.example.com")
        assert "Invalid route identifier" in str(exc_info.value)
