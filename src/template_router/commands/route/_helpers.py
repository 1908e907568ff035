# src/template_router/commands/route/_helpers.py
"""Helper functions for route commands."""

from __future__ import annotations

from pathlib import Path

from template_router.models import RouteSpec, TLSConfig


def read_pem(path: Path | None) -> str:
    """Read PEM material from a file, or "" when no file was given."""
    if path is None:
        return ""
    try:
        return path.read_text()
    except OSError as e:
        raise SystemExit(f"[error] Cannot read {path}: {e}") from e


def build_route_spec(
    namespace: str,
    name: str,
    host: str,
    path: str = "",
    termination: str | None = None,
    cert: Path | None = None,
    key: Path | None = None,
    ca_cert: Path | None = None,
    dest_ca_cert: Path | None = None,
) -> RouteSpec:
    """Build a RouteSpec from CLI arguments, reading certificate files."""
    try:
        tls = None
        if termination:
            tls = TLSConfig(
                termination=termination,
                certificate=read_pem(cert),
                key=read_pem(key),
                ca_certificate=read_pem(ca_cert),
                destination_ca_certificate=read_pem(dest_ca_cert),
            )
        return RouteSpec(namespace=namespace, name=name, host=host, path=path, tls=tls)
    except ValueError as e:
        raise SystemExit(f"[error] {e}") from e
