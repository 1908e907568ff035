# src/template_router/commit.py
"""The commit pipeline: persist, write certificates, render, reload.

Steps run in that order and stop at the first failure. Nothing is rolled
back: a failed reload leaves the state file, certificates and rendered
config already updated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .certs import CertificateStore
from .errors import CertificateError
from .policy import should_write_certificates
from .reload import Reloader
from .state import RouterState
from .templates import ConfigTemplate

logger = logging.getLogger(__name__)


def write_certificates(
    state: RouterState,
    cert_store: CertificateStore,
    default_certificate_configured: bool = False,
) -> list[Path]:
    """Write certificates for every eligible route. Stops at the first error."""
    written = []
    for unit in state.units.values():
        for key, cfg in unit.service_alias_configs.items():
            if not should_write_certificates(cfg, default_certificate_configured):
                continue
            try:
                written.extend(cert_store.write_certificates_for_config(cfg))
            except CertificateError as e:
                logger.error("Error writing certificates for %s (%s): %s", unit.name, key, e)
                raise
    return written


def render_templates(
    state: RouterState,
    templates: Iterable[ConfigTemplate],
    default_certificate_path: str = "",
) -> list[Path]:
    return [tpl.write(state.units, default_certificate_path) for tpl in templates]


def commit(
    state: RouterState,
    templates: Iterable[ConfigTemplate],
    cert_store: CertificateStore,
    reloader: Reloader,
    state_path: Path,
    default_certificate_path: str = "",
    default_certificate_configured: bool = False,
) -> str:
    """Bring the proxy in line with ``state``. Returns the reload output.

    Raises:
        StateError: State could not be persisted; nothing else was touched.
        CertificateError: A certificate could not be written.
        TemplateError: A template failed to render or its output to be written.
        ReloadError: The reload command failed; carries its output.
    """
    logger.debug("Committing router changes")
    state.save(state_path)
    write_certificates(state, cert_store, default_certificate_configured)
    render_templates(state, templates, default_certificate_path)
    output = reloader.reload()
    logger.info("Committed %d service unit(s)", len(state))
    return output
