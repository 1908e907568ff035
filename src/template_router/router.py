# src/template_router/router.py
"""Template router: a backend-agnostic router that generates proxy config
files from templates and reloads the proxy with a script.

The orchestrator calls the mutation methods, then commit(). Access is
single-writer; a concurrent orchestrator must serialize mutate/commit
cycles itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .certs import CertificateStore
from .commit import commit
from .config import Config
from .models import Endpoint, RouteSpec, ServiceAliasConfig, ServiceUnit
from .policy import should_write_certificates
from .reload import Reloader, ScriptReloader
from .state import RouterState
from .templates import ConfigTemplate, load_templates

logger = logging.getLogger(__name__)


class Router:
    """Owns the route state, certificate store, templates and reloader.

    Construction runs the startup sequence: write the default certificate,
    load persisted state (a missing file is an empty state), then commit
    once so the proxy matches the loaded state. Callers that commit right
    after mutating can pass initial_commit=False to avoid a second reload.
    """

    def __init__(
        self,
        config: Config,
        reloader: Reloader | None = None,
        templates: Iterable[ConfigTemplate] | None = None,
        cert_store: CertificateStore | None = None,
        initial_commit: bool = True,
    ):
        logger.info("Creating a new template router")
        self.config = config
        self.templates = (
            list(templates) if templates is not None else load_templates(config.templates)
        )
        self.reloader = reloader or ScriptReloader(config.reload_script, config.reload_timeout)
        self.cert_store = cert_store or CertificateStore(
            config.cert_dir, config.cacert_dir, config.default_cert_dir
        )
        self.default_certificate = config.resolve_default_certificate()
        self.default_certificate_path = ""
        self.state = RouterState()

        self._write_default_certificate()
        logger.info("Reading any persisted state")
        self.state = RouterState.load(config.state_file)
        if initial_commit:
            logger.info("Performing initial commit")
            self.commit()

    def _write_default_certificate(self) -> None:
        if not self.default_certificate:
            return
        path = self.cert_store.write_default_certificate(self.default_certificate)
        self.default_certificate_path = str(path)

    def commit(self) -> str:
        """Persist state, write certificates, render templates and reload."""
        return commit(
            self.state,
            self.templates,
            self.cert_store,
            self.reloader,
            self.config.state_file,
            default_certificate_path=self.default_certificate_path,
            default_certificate_configured=bool(self.default_certificate),
        )

    def should_write_certificates(self, cfg: ServiceAliasConfig) -> bool:
        return should_write_certificates(cfg, bool(self.default_certificate))

    def create_service_unit(self, unit_id: str) -> ServiceUnit:
        return self.state.create_service_unit(unit_id)

    def find_service_unit(self, unit_id: str) -> tuple[ServiceUnit | None, bool]:
        return self.state.find_service_unit(unit_id)

    def delete_service_unit(self, unit_id: str) -> None:
        self.state.delete_service_unit(unit_id)

    def delete_endpoints(self, unit_id: str) -> None:
        self.state.delete_endpoints(unit_id)

    def add_route(self, unit_id: str, route: RouteSpec) -> ServiceAliasConfig:
        return self.state.add_route(unit_id, route)

    def remove_route(self, unit_id: str, route: RouteSpec) -> None:
        self.state.remove_route(unit_id, route)

    def add_endpoints(self, unit_id: str, endpoints: Iterable[Endpoint]) -> list[Endpoint]:
        return self.state.add_endpoints(unit_id, endpoints)
