# src/template_router/commands/route/annotations.py
"""Type annotations for route commands."""

from pathlib import Path
from typing import Annotated

import cyclopts

UnitName = Annotated[str, cyclopts.Parameter(help="Service unit the route belongs to")]

Namespace = Annotated[str, cyclopts.Parameter(help="Route namespace")]

RouteName = Annotated[str, cyclopts.Parameter(help="Route name")]

Host = Annotated[
    str,
    cyclopts.Parameter(name=["--host", "-H"], help="Externally visible hostname"),
]

RoutePath = Annotated[
    str,
    cyclopts.Parameter(name=["--path", "-p"], help="URL path prefix"),
]

Termination = Annotated[
    str | None,
    cyclopts.Parameter(
        name=["--termination", "-t"],
        help="TLS termination: edge, passthrough or reencrypt",
    ),
]

PemFile = Annotated[Path | None, cyclopts.Parameter(help="PEM file")]
