"""Compute unit factory.

Every route gets its own Lambda function, but all of them are built from the
same container payload. The ``build_target`` selects the Docker build stage
(``api`` for the HTTP routes) and the route-specific dispatch happens inside
the payload at invocation time.
"""

from __future__ import annotations

from typing import Dict, Optional

from infrastructure.core.capabilities import ComputeCapability
from infrastructure.core.errors import ConfigurationError, OrderingError
from infrastructure.core.topology import (
    ENV_PARTITION_KEY_NAME,
    ENV_SORT_KEY_NAME,
    ENV_TABLE_NAME,
    FIXED_LIMITS,
    ComputeUnit,
    StorageResource,
)

DEFAULT_BUILD_TARGET = "api"
DEFAULT_FUNCTION_NAME_PREFIX = "clean-serverless"
MAX_FUNCTION_NAME_LENGTH = 64


def compute_unit_name(route_name: str, prefix: str = DEFAULT_FUNCTION_NAME_PREFIX) -> str:
    """Return the deployed function name for a route (deterministic)."""
    name = str(route_name or "").strip()
    if not name:
        raise ConfigurationError("Route name must be provided")
    normalized_prefix = str(prefix or "").strip().rstrip("-")
    derived = f"{normalized_prefix}-{name}" if normalized_prefix else name
    if len(derived) > MAX_FUNCTION_NAME_LENGTH:
        raise ConfigurationError(f"Function name '{derived}' exceeds {MAX_FUNCTION_NAME_LENGTH} characters")
    return derived


def storage_environment(storage: StorageResource) -> Dict[str, str]:
    """Environment bindings the payload needs to address the table."""
    return {
        ENV_TABLE_NAME: storage.table_name,
        ENV_PARTITION_KEY_NAME: storage.partition_key_name,
        ENV_SORT_KEY_NAME: storage.sort_key_name,
    }


class ComputeFactory:
    def __init__(
        self,
        capability: ComputeCapability,
        *,
        payload_ref: str,
        name_prefix: str = DEFAULT_FUNCTION_NAME_PREFIX,
    ) -> None:
        if not str(payload_ref or "").strip():
            raise ConfigurationError("Payload location must be provided")
        self._capability = capability
        self._payload_ref = payload_ref
        self._name_prefix = name_prefix

    def create_compute_unit(
        self,
        route_name: str,
        build_target: str,
        storage: Optional[StorageResource],
    ) -> ComputeUnit:
        if storage is None or storage.handle is None or not storage.table_name:
            raise OrderingError(f"Storage must be provisioned before compute unit '{route_name}'")
        target = str(build_target or "").strip()
        if not target:
            raise ConfigurationError("Build target must be provided")

        logical_id = str(route_name or "").strip()
        name = compute_unit_name(logical_id, self._name_prefix)
        environment = storage_environment(storage)

        handle = self._capability.create_unit(
            logical_id=logical_id,
            name=name,
            payload_ref=self._payload_ref,
            build_target=target,
            architecture=FIXED_LIMITS.architecture,
            timeout_seconds=FIXED_LIMITS.timeout_seconds,
            memory_mb=FIXED_LIMITS.memory_mb,
            environment=environment,
        )
        return ComputeUnit(
            route_name=logical_id,
            name=name,
            build_target=target,
            environment=environment,
            limits=FIXED_LIMITS,
            handle=handle,
        )
