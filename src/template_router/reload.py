# src/template_router/reload.py
"""Reloading the proxy after its config has been rewritten."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import ReloadError

logger = logging.getLogger(__name__)


class Reloader(Protocol):
    def reload(self) -> str:
        """Reload the proxy and return its output. Raises ReloadError."""
        ...


class ScriptReloader:
    """Runs a reload script with no arguments, capturing combined output.

    No timeout by default: the commit blocks until the script exits.
    """

    def __init__(self, script: Path | str, timeout: float | None = None):
        self.script = str(script)
        self.timeout = timeout

    def reload(self) -> str:
        try:
            result = subprocess.run(
                [self.script],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ReloadError(f"Reload script not found: {self.script}") from e
        except PermissionError as e:
            raise ReloadError(f"Reload script not executable: {self.script}") from e
        except subprocess.TimeoutExpired as e:
            output = e.output or ""
            if isinstance(output, bytes):
                output = output.decode(errors="replace")
            logger.error("Reload timed out after %ss\n Reload output: %s", self.timeout, output)
            raise ReloadError(
                f"Reload script timed out after {self.timeout}s", output=output
            ) from e

        output = result.stdout or ""
        if result.returncode != 0:
            logger.error(
                "Error reloading router: exit status %d\n Reload output: %s",
                result.returncode,
                output,
            )
            raise ReloadError(
                f"Reload script exited with status {result.returncode}",
                output=output,
                returncode=result.returncode,
            )
        logger.debug("Reload output: %s", output)
        return output


class NoopReloader:
    """Skips the reload step (rendering only)."""

    def reload(self) -> str:
        logger.info("Reload skipped")
        return ""
