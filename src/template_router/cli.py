# src/template_router/cli.py

"""
Render reverse-proxy config from route state and reload the proxy.

Usage:

    template-router sync --config /etc/router/router.yaml
    template-router unit create default-web
    template-router route add default-web default web --host web.example.com
    template-router route add default-web default secure --host secure.example.com \\
        --termination edge --cert web.crt --key web.key
    template-router endpoints add default-web ep1=10.0.0.5:8080
    template-router show --json

    # Or run directly without installing:
    $ pip install -e .
    $ python -m template_router.cli sync
"""

import json
from typing import Annotated

import cyclopts

from . import __version__
from .commands import endpoints, route, unit
from .commands.common import (
    ConfigPath,
    JsonOutput,
    NoReload,
    build_router,
    configure_logging,
    load_config,
)
from .errors import RouterError
from .state import RouterState

app = cyclopts.App(
    name="template-router",
    help="Template router: render proxy config from route state and reload the proxy",
    version=__version__,
)

# Register topic sub-apps
app.command(unit.app)
app.command(route.app)
app.command(endpoints.app)


@app.default
def _default():
    """Show help when no command is specified."""
    app.help_print([])


@app.command
def sync(config: ConfigPath = None, no_reload: NoReload = False) -> None:
    """Start the router: write the default cert, load state, commit once."""
    try:
        router = build_router(config, no_reload, initial_commit=True)
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e
    print(f"[ok] Synced {len(router.state)} service unit(s)")


@app.command
def show(config: ConfigPath = None, json_output: JsonOutput = False) -> None:
    """Show persisted route state without committing."""
    cfg = load_config(config)
    try:
        state = RouterState.load(cfg.state_file)
    except RouterError as e:
        raise SystemExit(f"[error] {e}") from e

    if json_output:
        print(json.dumps(state.to_dict(), indent=2))
        return

    if not len(state):
        print("No service units")
        return
    for name, svc in sorted(state.units.items()):
        print(f"{name}")
        for key, cfg_alias in sorted(svc.service_alias_configs.items()):
            tls = cfg_alias.tls_termination.value if cfg_alias.tls_termination else "none"
            print(f"  route {key}: {cfg_alias.host}{cfg_alias.path} (tls: {tls})")
        for eid, ep in sorted(svc.endpoint_table.items()):
            print(f"  endpoint {eid}: {ep.ip}:{ep.port}")


@app.meta.default
def main(
    *tokens: Annotated[str, cyclopts.Parameter(show=False, allow_leading_hyphen=True)],
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Enable debug logging"),
    ] = False,
):
    configure_logging(verbose)
    app(tokens)


if __name__ == "__main__":
    app.meta()
