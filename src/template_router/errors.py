# src/template_router/errors.py
"""Exception hierarchy for the template router.

Mutating operations signal absence of a service unit by raising
ServiceUnitNotFound only where silently continuing would lose data
(add_route, add_endpoints). Everything else raised here aborts a commit.
"""


class RouterError(Exception):
    """Base class for template router errors."""


class ServiceUnitNotFound(RouterError):
    """Operation requires a service unit that has not been created."""

    def __init__(self, unit_id: str):
        super().__init__(f"Service unit not found: {unit_id}")
        self.unit_id = unit_id


class StateError(RouterError):
    """Persisted router state could not be read or written."""


class CertificateError(RouterError):
    """Certificate material could not be written."""


class TemplateError(RouterError):
    """A config template could not be loaded, rendered or written."""


class ReloadError(RouterError):
    """Reload command failed. Carries the combined stdout/stderr."""

    def __init__(self, message: str, output: str = "", returncode: int | None = None):
        super().__init__(f"{message}\nReload output: {output}" if output else message)
        self.output = output
        self.returncode = returncode
