# src/template_router/commands/route/app.py
"""Route management app and commands."""

import cyclopts

from template_router.errors import RouterError

from ..common import ConfigPath, NoReload, build_router
from ._helpers import build_route_spec
from .annotations import Host, Namespace, PemFile, RouteName, RoutePath, Termination, UnitName

app = cyclopts.App(
    name=["route", "routes"],
    help="Add and remove frontend routes",
)


@app.command
def add(
    unit: UnitName,
    namespace: Namespace,
    name: RouteName,
    *,
    host: Host,
    path: RoutePath = "",
    termination: Termination = None,
    cert: PemFile = None,
    key: PemFile = None,
    ca_cert: PemFile = None,
    dest_ca_cert: PemFile = None,
    config: ConfigPath = None,
    no_reload: NoReload = False,
) -> None:
    """Add or replace a route on a service unit, then commit.

    The unit must exist (see 'unit create'). For edge and reencrypt
    termination pass --cert and --key; without them the route is still
    configured but no certificate files are written.
    """
    route = build_route_spec(
        namespace,
        name,
        host,
        path=path,
        termination=termination,
        cert=cert,
        key=key,
        ca_cert=ca_cert,
        dest_ca_cert=dest_ca_cert,
    )
    try:
        router = build_router(config, no_reload)
        router.add_route(unit, route)
        router.commit()
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e
    print(f"[ok] Route {route.key} -> {unit} ({host})")


@app.command
def remove(
    unit: UnitName,
    namespace: Namespace,
    name: RouteName,
    config: ConfigPath = None,
    no_reload: NoReload = False,
) -> None:
    """Remove a route from a service unit, then commit."""
    route = build_route_spec(namespace, name, host="")
    try:
        router = build_router(config, no_reload)
        router.remove_route(unit, route)
        router.commit()
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e
    print(f"[ok] Removed route {route.key} from {unit}")
