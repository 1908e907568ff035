# src/template_router/commands/common.py
"""Shared CLI annotations and router construction.

Common flags use long+short forms:
  --config, -c
  --no-reload
  --json, -j
"""

import logging
from pathlib import Path
from typing import Annotated

import cyclopts

from template_router.config import Config
from template_router.reload import NoopReloader
from template_router.router import Router

ConfigPath = Annotated[
    Path | None,
    cyclopts.Parameter(
        name=["--config", "-c"],
        help="Router config file (YAML). Defaults to environment settings.",
    ),
]

NoReload = Annotated[
    bool,
    cyclopts.Parameter(
        name="--no-reload",
        negative=[],  # Disable --no-no-reload generation
        help="Render config without running the reload script",
    ),
]

JsonOutput = Annotated[
    bool,
    cyclopts.Parameter(
        name=["--json", "-j"],
        help="Output as JSON",
    ),
]


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_config(config: Path | None) -> Config:
    cfg = Config.from_file(config) if config else Config()
    cfg.validate()
    return cfg


def build_router(
    config: Path | None,
    no_reload: bool = False,
    initial_commit: bool = False,
) -> Router:
    """Start a router for a single mutate-then-commit CLI invocation."""
    cfg = load_config(config)
    reloader = NoopReloader() if no_reload else None
    return Router(cfg, reloader=reloader, initial_commit=initial_commit)
