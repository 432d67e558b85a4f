"""Resource graph produced by one provisioning run."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from infrastructure.core.routes import HttpMethod

BILLING_MODE_PAY_PER_REQUEST = "PAY_PER_REQUEST"
REMOVAL_POLICY_DESTROY = "DESTROY"

ARCHITECTURE_ARM_64 = "arm64"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MEMORY_MB = 1280

ENV_TABLE_NAME = "DYNAMO_TABLE_NAME"
ENV_PARTITION_KEY_NAME = "DYNAMO_PK_NAME"
ENV_SORT_KEY_NAME = "DYNAMO_SK_NAME"

GRANT_STORAGE_READ_WRITE = "storage-read-write"
GRANT_LOGGING = "logging"


@dataclass(frozen=True)
class ResourceLimits:
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    memory_mb: int = DEFAULT_MEMORY_MB
    architecture: str = ARCHITECTURE_ARM_64


FIXED_LIMITS = ResourceLimits()


@dataclass(frozen=True)
class StorageResource:
    partition_key_name: str
    sort_key_name: str
    table_name: str
    handle: Any = field(default=None, compare=False, repr=False)
    billing_mode: str = BILLING_MODE_PAY_PER_REQUEST
    removal_policy: str = REMOVAL_POLICY_DESTROY
    table_arn: str = ""


@dataclass(frozen=True)
class ComputeUnit:
    route_name: str
    name: str
    build_target: str
    environment: Mapping[str, str]
    limits: ResourceLimits = FIXED_LIMITS
    handle: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "environment", MappingProxyType(dict(self.environment)))


@dataclass(frozen=True)
class PermissionGrant:
    unit_name: str
    kind: str
    actions: Tuple[str, ...]
    resources: Tuple[str, ...]
    effect: str = "Allow"


@dataclass
class ApiSurface:
    """API shell plus the resource nodes created so far, keyed by path."""

    name: str
    stage_name: str
    handle: Any = field(default=None, repr=False)
    nodes: Dict[str, Any] = field(default_factory=dict, repr=False)

    def node_paths(self) -> List[str]:
        return list(self.nodes)


@dataclass(frozen=True)
class RouteBinding:
    route_name: str
    method: HttpMethod
    path: str
    unit_name: str


@dataclass
class Topology:
    storage: StorageResource
    api: ApiSurface
    units: List[ComputeUnit] = field(default_factory=list)
    grants: List[PermissionGrant] = field(default_factory=list)
    bindings: List[RouteBinding] = field(default_factory=list)

    def resource_paths(self) -> List[str]:
        return self.api.node_paths()

    def unit_for(self, route_name: str) -> Optional[ComputeUnit]:
        for unit in self.units:
            if unit.route_name == route_name:
                return unit
        return None

    def grants_for(self, unit_name: str) -> List[PermissionGrant]:
        return [grant for grant in self.grants if grant.unit_name == unit_name]

    def summary(self) -> Dict[str, Any]:
        """Return a JSON-serializable description of the topology."""
        return {
            "storage": {
                "table_name": self.storage.table_name,
                "table_arn": self.storage.table_arn,
                "partition_key": self.storage.partition_key_name,
                "sort_key": self.storage.sort_key_name,
                "billing_mode": self.storage.billing_mode,
                "removal_policy": self.storage.removal_policy,
            },
            "api": {
                "name": self.api.name,
                "stage": self.api.stage_name,
                "resource_paths": self.resource_paths(),
            },
            "functions": [
                {
                    "route": unit.route_name,
                    "name": unit.name,
                    "build_target": unit.build_target,
                    "timeout_seconds": unit.limits.timeout_seconds,
                    "memory_mb": unit.limits.memory_mb,
                    "architecture": unit.limits.architecture,
                    "environment": dict(unit.environment),
                    "grants": sorted(grant.kind for grant in self.grants_for(unit.name)),
                }
                for unit in self.units
            ],
            "routes": [
                {
                    "method": binding.method.value,
                    "path": binding.path,
                    "function": binding.unit_name,
                }
                for binding in self.bindings
            ],
        }
