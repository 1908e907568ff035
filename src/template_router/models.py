# src/template_router/models.py
"""Router data model.

Entity graph:
    RouterState -> ServiceUnit -> ServiceAliasConfig -> Certificate
                               -> Endpoint

The dict forms use the key names of the persisted routes.json document
(Name, ServiceAliasConfigs, EndpointTable, ...), so state files written by
other template routers load unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Appended to the host to build certificate IDs. "_" is not valid in a
# hostname, so suffixed IDs never collide with a real host.
CA_CERT_SUFFIX = "_ca"
DEST_CERT_SUFFIX = "_pod"

# Joins namespace and name into a route key. Namespaces and names are DNS
# labels/subdomains, which never contain "_", and the key stays file-name safe.
ROUTE_KEY_SEPARATOR = "_"


class TLSTermination(str, Enum):
    """Where TLS is terminated for a route. No TLS is represented by None."""

    EDGE = "edge"
    PASSTHROUGH = "passthrough"
    REENCRYPT = "reencrypt"

    @classmethod
    def parse(cls, value: str | TLSTermination | None) -> TLSTermination | None:
        if isinstance(value, cls):
            return value
        if value is None or value.lower() in ("", "none"):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Unknown TLS termination: {value!r}") from None


@dataclass
class Certificate:
    """PEM material for one role (host cert, CA cert or destination CA)."""

    id: str
    contents: str = ""
    private_key: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"ID": self.id, "Contents": self.contents, "PrivateKey": self.private_key}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Certificate:
        return cls(
            id=data.get("ID", ""),
            contents=data.get("Contents", ""),
            private_key=data.get("PrivateKey", ""),
        )


@dataclass(frozen=True)
class Endpoint:
    """A backend address. Immutable once stored under its ID."""

    id: str
    ip: str
    port: str

    def to_dict(self) -> dict[str, str]:
        return {"ID": self.id, "IP": self.ip, "Port": self.port}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Endpoint:
        return cls(id=data.get("ID", ""), ip=data.get("IP", ""), port=str(data.get("Port", "")))

    @classmethod
    def parse(cls, value: str) -> Endpoint:
        """Parse ``ID=IP:PORT`` (or ``IP:PORT``, using it as the ID)."""
        endpoint_id, sep, address = value.partition("=")
        if not sep:
            address = endpoint_id
        ip, sep, port = address.rpartition(":")
        if not sep or not ip or not port:
            raise ValueError(f"Invalid endpoint (expected [ID=]IP:PORT): {value!r}")
        return cls(id=endpoint_id, ip=ip, port=port)


@dataclass
class ServiceAliasConfig:
    """One routable frontend binding (host + optional path)."""

    host: str
    path: str = ""
    tls_termination: TLSTermination | None = None
    certificates: dict[str, Certificate] | None = None

    @property
    def host_certificate(self) -> Certificate | None:
        if not self.certificates:
            return None
        return self.certificates.get(self.host)

    @property
    def ca_certificate(self) -> Certificate | None:
        if not self.certificates:
            return None
        return self.certificates.get(self.host + CA_CERT_SUFFIX)

    @property
    def destination_ca_certificate(self) -> Certificate | None:
        if not self.certificates:
            return None
        return self.certificates.get(self.host + DEST_CERT_SUFFIX)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Host": self.host,
            "Path": self.path,
            "TLSTermination": self.tls_termination.value if self.tls_termination else "",
            "Certificates": (
                {cid: cert.to_dict() for cid, cert in self.certificates.items()}
                if self.certificates is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceAliasConfig:
        certs = data.get("Certificates")
        return cls(
            host=data.get("Host", ""),
            path=data.get("Path", ""),
            tls_termination=TLSTermination.parse(data.get("TLSTermination")),
            certificates=(
                {cid: Certificate.from_dict(c) for cid, c in certs.items()}
                if certs is not None
                else None
            ),
        )


@dataclass
class ServiceUnit:
    """A backend service with its frontend aliases and endpoints."""

    name: str
    service_alias_configs: dict[str, ServiceAliasConfig] = field(default_factory=dict)
    endpoint_table: dict[str, Endpoint] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "ServiceAliasConfigs": {
                key: cfg.to_dict() for key, cfg in self.service_alias_configs.items()
            },
            "EndpointTable": {eid: ep.to_dict() for eid, ep in self.endpoint_table.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceUnit:
        return cls(
            name=data.get("Name", ""),
            service_alias_configs={
                key: ServiceAliasConfig.from_dict(cfg)
                for key, cfg in (data.get("ServiceAliasConfigs") or {}).items()
            },
            endpoint_table={
                eid: Endpoint.from_dict(ep)
                for eid, ep in (data.get("EndpointTable") or {}).items()
            },
        )


@dataclass
class TLSConfig:
    """TLS section of an incoming route."""

    termination: TLSTermination | None = None
    certificate: str = ""
    key: str = ""
    ca_certificate: str = ""
    destination_ca_certificate: str = ""

    def __post_init__(self) -> None:
        self.termination = TLSTermination.parse(self.termination)


@dataclass
class RouteSpec:
    """A route as observed by the orchestrator."""

    namespace: str
    name: str
    host: str
    path: str = ""
    tls: TLSConfig | None = None

    def __post_init__(self) -> None:
        for part in (self.namespace, self.name):
            if ROUTE_KEY_SEPARATOR in part or "/" in part:
                raise ValueError(
                    f"Invalid route identifier {part!r}: must not contain "
                    f"{ROUTE_KEY_SEPARATOR!r} or '/'"
                )

    @property
    def key(self) -> str:
        """Route key in the form namespace_name.

        Not namespace/name: the key is used in config file names, where "/"
        is unsafe.
        """
        return f"{self.namespace}{ROUTE_KEY_SEPARATOR}{self.name}"
