# src/template_router/state.py
"""In-memory route state and its JSON persistence.

RouterState is not synchronized. Callers run one mutate-then-commit cycle
at a time.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import ServiceUnitNotFound, StateError
from .models import (
    CA_CERT_SUFFIX,
    DEST_CERT_SUFFIX,
    Certificate,
    Endpoint,
    RouteSpec,
    ServiceAliasConfig,
    ServiceUnit,
    TLSTermination,
)

logger = logging.getLogger(__name__)


def build_alias_config(route: RouteSpec) -> ServiceAliasConfig:
    """Build the frontend binding for a route, including its certificates.

    Passthrough routes carry no certificates: the proxy does not terminate
    TLS for them.
    """
    config = ServiceAliasConfig(host=route.host, path=route.path)
    tls = route.tls
    if tls is None or tls.termination is None:
        return config

    config.tls_termination = tls.termination
    if tls.termination is TLSTermination.PASSTHROUGH:
        return config

    config.certificates = {
        route.host: Certificate(id=route.host, contents=tls.certificate, private_key=tls.key)
    }
    if tls.ca_certificate:
        ca_id = route.host + CA_CERT_SUFFIX
        config.certificates[ca_id] = Certificate(id=ca_id, contents=tls.ca_certificate)
    if tls.destination_ca_certificate:
        dest_id = route.host + DEST_CERT_SUFFIX
        config.certificates[dest_id] = Certificate(
            id=dest_id, contents=tls.destination_ca_certificate
        )
    return config


class RouterState:
    """Mapping of service unit name to ServiceUnit, plus its mutation API."""

    def __init__(self, units: dict[str, ServiceUnit] | None = None):
        self.units: dict[str, ServiceUnit] = units if units is not None else {}

    def __iter__(self) -> Iterator[str]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self.units

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouterState):
            return NotImplemented
        return self.units == other.units

    def create_service_unit(self, unit_id: str) -> ServiceUnit:
        """Create an empty service unit, replacing any existing one."""
        unit = ServiceUnit(name=unit_id)
        self.units[unit_id] = unit
        return unit

    def find_service_unit(self, unit_id: str) -> tuple[ServiceUnit | None, bool]:
        unit = self.units.get(unit_id)
        return unit, unit is not None

    def delete_service_unit(self, unit_id: str) -> None:
        self.units.pop(unit_id, None)

    def delete_endpoints(self, unit_id: str) -> None:
        unit, found = self.find_service_unit(unit_id)
        if not found:
            return
        unit.endpoint_table = {}

    def _require(self, unit_id: str) -> ServiceUnit:
        unit, found = self.find_service_unit(unit_id)
        if not found:
            raise ServiceUnitNotFound(unit_id)
        return unit

    def add_route(self, unit_id: str, route: RouteSpec) -> ServiceAliasConfig:
        """Create or replace the alias for ``route`` on an existing unit.

        Raises:
            ServiceUnitNotFound: If create_service_unit was not called first.
        """
        unit = self._require(unit_id)
        config = build_alias_config(route)
        unit.service_alias_configs[route.key] = config
        logger.debug("Added route %s to %s (host=%s)", route.key, unit_id, route.host)
        return config

    def remove_route(self, unit_id: str, route: RouteSpec) -> None:
        unit, found = self.find_service_unit(unit_id)
        if not found:
            return
        unit.service_alias_configs.pop(route.key, None)

    def add_endpoints(self, unit_id: str, endpoints: Iterable[Endpoint]) -> list[Endpoint]:
        """Add endpoints whose IDs are not yet present. Returns the ones added.

        Existing endpoints are never overwritten: the first write for an ID wins.

        Raises:
            ServiceUnitNotFound: If create_service_unit was not called first.
        """
        unit = self._require(unit_id)
        added = []
        for ep in endpoints:
            if ep.id in unit.endpoint_table:
                continue
            unit.endpoint_table[ep.id] = Endpoint(ep.id, ep.ip, ep.port)
            added.append(ep)
        return added

    def to_dict(self) -> dict:
        return {name: unit.to_dict() for name, unit in self.units.items()}

    @classmethod
    def from_dict(cls, data: dict) -> RouterState:
        if not isinstance(data, dict):
            raise StateError(f"Expected a mapping of service units, got {type(data).__name__}")
        return cls({name: ServiceUnit.from_dict(unit) for name, unit in data.items()})

    def save(self, path: Path) -> None:
        """Write the whole state as indented JSON, replacing the file."""
        try:
            content = json.dumps(self.to_dict(), indent=2)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write route table %s: %s", path, e)
            raise StateError(f"Failed to write route table {path}: {e}") from e

    @classmethod
    def load(cls, path: Path) -> RouterState:
        """Load state from ``path``. A missing file is an empty state.

        Raises:
            StateError: If the file exists but cannot be read or parsed.
        """
        try:
            content = path.read_text()
        except FileNotFoundError:
            logger.info("No persisted state at %s, starting empty", path)
            return cls()
        except (OSError, UnicodeDecodeError) as e:
            raise StateError(f"Failed to read route table {path}: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StateError(f"Invalid route table {path}: {e}") from e
        try:
            return cls.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise StateError(f"Invalid route table {path}: {e}") from e
