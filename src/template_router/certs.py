# src/template_router/certs.py
"""Certificate files on disk.

Layout:
    <default_cert_dir>/default.pem   - router-wide default certificate
    <cert_dir>/<host>.pem            - route cert + key (+ CA chain)
    <cacert_dir>/<host>_ca.pem       - route CA certificate
    <cacert_dir>/<host>_pod.pem      - destination CA (reencrypt upstream trust)

One file per identifier. Rewriting an identifier replaces the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import CertificateError
from .models import ServiceAliasConfig

logger = logging.getLogger(__name__)

DEFAULT_CERT_NAME = "default"
CERT_EXTENSION = ".pem"


def certificate_path(directory: Path, identifier: str) -> Path:
    """Deterministic file path for a certificate identifier."""
    if not identifier or "/" in identifier or identifier in (".", ".."):
        raise CertificateError(f"Invalid certificate identifier: {identifier!r}")
    return directory / f"{identifier}{CERT_EXTENSION}"


def _join_pem(*parts: str) -> bytes:
    blocks = [p if p.endswith("\n") else p + "\n" for p in parts if p]
    return "".join(blocks).encode()


class CertificateStore:
    """Writes PEM material under the default and per-route certificate roots."""

    def __init__(self, cert_dir: Path, cacert_dir: Path, default_cert_dir: Path | None = None):
        self.cert_dir = Path(cert_dir)
        self.cacert_dir = Path(cacert_dir)
        self.default_cert_dir = (
            Path(default_cert_dir) if default_cert_dir else self.cert_dir.parent / "default-cert"
        )
        # A route whose host is "default" would otherwise replace default.pem.
        if self.default_cert_dir in (self.cert_dir, self.cacert_dir):
            raise CertificateError(
                f"Default certificate directory must differ from route certificate "
                f"directories: {self.default_cert_dir}"
            )

    def write(self, directory: Path, identifier: str, data: bytes) -> Path:
        """Write ``data`` to the file for ``identifier``, replacing it.

        Raises:
            CertificateError: If the file cannot be written.
        """
        path = certificate_path(Path(directory), identifier)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
            path.chmod(0o600)
        except OSError as e:
            raise CertificateError(f"Failed to write certificate {path}: {e}") from e
        logger.debug("Wrote certificate %s", path)
        return path

    def write_default_certificate(self, contents: str) -> Path:
        """Write the router-wide default certificate. Returns its path."""
        logger.info("Writing default certificate to %s", self.default_cert_dir)
        return self.write(self.default_cert_dir, DEFAULT_CERT_NAME, _join_pem(contents))

    def write_certificates_for_config(self, cfg: ServiceAliasConfig) -> list[Path]:
        """Write the host, CA and destination CA certificates of a route.

        The host file holds cert, key and CA cert (when present) so the
        proxy can load the full chain from one file. Callers check
        eligibility with should_write_certificates first.
        """
        written = []
        host_cert = cfg.host_certificate
        ca_cert = cfg.ca_certificate
        dest_cert = cfg.destination_ca_certificate

        if host_cert is not None:
            chain = _join_pem(
                host_cert.contents,
                host_cert.private_key,
                ca_cert.contents if ca_cert else "",
            )
            written.append(self.write(self.cert_dir, host_cert.id, chain))
        if ca_cert is not None and ca_cert.contents:
            written.append(self.write(self.cacert_dir, ca_cert.id, _join_pem(ca_cert.contents)))
        if dest_cert is not None and dest_cert.contents:
            written.append(
                self.write(self.cacert_dir, dest_cert.id, _join_pem(dest_cert.contents))
            )
        return written
