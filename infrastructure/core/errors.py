"""Error taxonomy for route-table provisioning."""

from __future__ import annotations

from typing import Optional


class ProvisioningError(Exception):
    """Base class for failures raised while composing the topology."""


class ConfigurationError(ProvisioningError, ValueError):
    """Raised for invalid build-time configuration (routes, names, key schema)."""


class OrderingError(ProvisioningError, RuntimeError):
    """Raised when a dependent resource is referenced before it was created."""


class PlatformError(ProvisioningError, RuntimeError):
    """Raised when a platform capability rejects an operation.

    Wraps the original exception (available as ``__cause__``) together with
    the provisioning step and route that were being processed.
    """

    def __init__(self, message: str, *, step: str, route_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.step = step
        self.route_name = route_name
