# src/template_router/commands/unit.py
"""Service unit commands."""

from typing import Annotated

import cyclopts

from template_router.errors import RouterError

from .common import ConfigPath, NoReload, build_router

app = cyclopts.App(
    name=["unit", "units"],
    help="Create and delete service units",
)

UnitName = Annotated[str, cyclopts.Parameter(help="Service unit name")]


@app.command
def create(name: UnitName, config: ConfigPath = None, no_reload: NoReload = False) -> None:
    """Create an empty service unit, replacing any existing one, and commit."""
    try:
        router = build_router(config, no_reload)
        router.create_service_unit(name)
        router.commit()
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e
    print(f"[ok] Created service unit {name}")


@app.command
def delete(name: UnitName, config: ConfigPath = None, no_reload: NoReload = False) -> None:
    """Delete a service unit with all its routes and endpoints, and commit."""
    try:
        router = build_router(config, no_reload)
        _, found = router.find_service_unit(name)
        router.delete_service_unit(name)
        router.commit()
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e
    if found:
        print(f"[ok] Deleted service unit {name}")
    else:
        print(f"[skip] Service unit {name} not found")
