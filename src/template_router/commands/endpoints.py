# src/template_router/commands/endpoints.py
"""Endpoint commands."""

from typing import Annotated

import cyclopts

from template_router.errors import RouterError
from template_router.models import Endpoint

from .common import ConfigPath, NoReload, build_router

app = cyclopts.App(
    name=["endpoints", "endpoint"],
    help="Add or clear backend endpoints of a service unit",
)


@app.command
def add(
    name: Annotated[str, cyclopts.Parameter(help="Service unit name")],
    endpoints: Annotated[
        tuple[str, ...],
        cyclopts.Parameter(help="Endpoints as ID=IP:PORT (or IP:PORT)"),
    ],
    config: ConfigPath = None,
    no_reload: NoReload = False,
) -> None:
    """Add endpoints. IDs already present are left unchanged."""
    try:
        parsed = [Endpoint.parse(value) for value in endpoints]
    except ValueError as e:
        raise SystemExit(f"[error] {e}") from e

    try:
        router = build_router(config, no_reload)
        added = router.add_endpoints(name, parsed)
        router.commit()
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e

    skipped = len(parsed) - len(added)
    print(f"[ok] Added {len(added)} endpoint(s) to {name}")
    if skipped:
        print(f"[skip] {skipped} endpoint(s) already present")


@app.command
def clear(
    name: Annotated[str, cyclopts.Parameter(help="Service unit name")],
    config: ConfigPath = None,
    no_reload: NoReload = False,
) -> None:
    """Remove all endpoints of a service unit."""
    try:
        router = build_router(config, no_reload)
        router.delete_endpoints(name)
        router.commit()
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e
    print(f"[ok] Cleared endpoints of {name}")
