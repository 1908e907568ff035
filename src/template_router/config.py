# src/template_router/config.py

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import CertificateError

DEFAULT_STATE_DIR = "/var/lib/containers/router"
DEFAULT_RELOAD_SCRIPT = "/var/lib/containers/router/reload-haproxy"


def _env_path(name: str, default: str | None = None) -> Path | None:
    value = os.environ.get(name, default)
    return Path(value) if value else None


@dataclass
class Config:
    """Router configuration paths.

    Directory layout:
        /var/lib/containers/router/routes.json - Persisted route state
        /var/lib/containers/router/default-cert/ - Router-wide default certificate
        /var/lib/containers/router/certs/      - Per-route certificates
        /var/lib/containers/router/cacerts/    - Route CA and destination CA certificates

    ``templates`` maps each rendered config file to the template it is
    rendered from.
    """

    state_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("ROUTER_STATE_DIR", DEFAULT_STATE_DIR))
    )
    reload_script: Path = field(
        default_factory=lambda: Path(os.environ.get("RELOAD_SCRIPT", DEFAULT_RELOAD_SCRIPT))
    )
    reload_timeout: float | None = None
    # Overrides state_dir/default-cert. Must not be a route certificate root.
    default_cert_root: Path | None = None
    templates: dict[Path, Path] = field(default_factory=dict)

    # Concatenated cert, key and CA of the wildcard default certificate.
    # DEFAULT_CERTIFICATE holds the PEM itself, DEFAULT_CERTIFICATE_PATH a file.
    default_certificate: str = field(
        default_factory=lambda: os.environ.get("DEFAULT_CERTIFICATE", "")
    )
    default_certificate_file: Path | None = field(
        default_factory=lambda: _env_path("DEFAULT_CERTIFICATE_PATH")
    )

    @property
    def state_file(self) -> Path:
        """Persisted route table."""
        return self.state_dir / "routes.json"

    @property
    def cert_dir(self) -> Path:
        """Per-route certificates."""
        return self.state_dir / "certs"

    @property
    def default_cert_dir(self) -> Path:
        """Router-wide default certificate, separate from route certificates."""
        return self.default_cert_root or self.state_dir / "default-cert"

    @property
    def cacert_dir(self) -> Path:
        """Route CA and destination CA certificates."""
        return self.state_dir / "cacerts"

    def resolve_default_certificate(self) -> str:
        """Default certificate PEM, read from default_certificate_file if needed."""
        if self.default_certificate:
            return self.default_certificate
        if self.default_certificate_file:
            try:
                return self.default_certificate_file.read_text()
            except OSError as e:
                raise CertificateError(
                    f"Failed to read default certificate {self.default_certificate_file}: {e}"
                ) from e
        return ""

    def validate(self) -> None:
        required = [*self.templates.values()]
        if self.default_certificate_file and not self.default_certificate:
            required.append(self.default_certificate_file)
        missing = [f for f in required if not f.exists()]
        if missing:
            raise SystemExit(f"Missing required files: {missing}")

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a YAML file.

        Example:
            state_dir: /var/lib/containers/router
            reload_script: /usr/local/bin/reload-haproxy
            reload_timeout: 30
            default_cert_dir: /var/lib/containers/router/default-cert
            default_certificate_path: /etc/router/default.pem
            templates:
              /var/lib/haproxy/conf/haproxy.config: /etc/router/haproxy.config.j2

        Keys not present fall back to the environment/defaults.
        """
        try:
            data = yaml.safe_load(Path(path).read_text()) or {}
        except FileNotFoundError as e:
            raise SystemExit(f"Config file not found: {path}") from e
        except yaml.YAMLError as e:
            raise SystemExit(f"Invalid config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise SystemExit(f"Invalid config file {path}: expected a mapping")

        cfg = cls()
        if "state_dir" in data:
            cfg.state_dir = Path(data["state_dir"])
        if "reload_script" in data:
            cfg.reload_script = Path(data["reload_script"])
        if data.get("reload_timeout") is not None:
            cfg.reload_timeout = float(data["reload_timeout"])
        if data.get("default_certificate"):
            cfg.default_certificate = data["default_certificate"]
        if data.get("default_certificate_path"):
            cfg.default_certificate_file = Path(data["default_certificate_path"])
        if data.get("default_cert_dir"):
            cfg.default_cert_root = Path(data["default_cert_dir"])
        cfg.templates = {
            Path(out): Path(tpl) for out, tpl in (data.get("templates") or {}).items()
        }
        return cfg
