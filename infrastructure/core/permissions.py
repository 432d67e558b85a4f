"""Permission grants attached to compute units."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from infrastructure.core.capabilities import ComputeCapability, StorageCapability
from infrastructure.core.errors import OrderingError
from infrastructure.core.iam import utils as iam_utils
from infrastructure.core.topology import (
    GRANT_LOGGING,
    GRANT_STORAGE_READ_WRITE,
    ComputeUnit,
    PermissionGrant,
    StorageResource,
)

# Mirrors the item-level action set of Table.grant_read_write_data.
STORAGE_READ_WRITE_ACTIONS: Tuple[str, ...] = (
    "dynamodb:BatchGetItem",
    "dynamodb:BatchWriteItem",
    "dynamodb:ConditionCheckItem",
    "dynamodb:DeleteItem",
    "dynamodb:DescribeTable",
    "dynamodb:GetItem",
    "dynamodb:GetRecords",
    "dynamodb:GetShardIterator",
    "dynamodb:PutItem",
    "dynamodb:Query",
    "dynamodb:Scan",
    "dynamodb:UpdateItem",
)


class PermissionBinder:
    """Grant table access and logging to compute units, at most once each."""

    def __init__(self, storage: StorageCapability, compute: ComputeCapability) -> None:
        self._storage = storage
        self._compute = compute
        self._granted: Dict[tuple, PermissionGrant] = {}

    @property
    def grants(self) -> List[PermissionGrant]:
        return list(self._granted.values())

    def grant_access(self, unit: Optional[ComputeUnit], storage: Optional[StorageResource]) -> PermissionGrant:
        self._require_unit(unit)
        if storage is None or storage.handle is None:
            raise OrderingError(f"Storage must be provisioned before granting access to '{unit.name}'")

        grant = PermissionGrant(
            unit_name=unit.name,
            kind=GRANT_STORAGE_READ_WRITE,
            actions=STORAGE_READ_WRITE_ACTIONS,
            resources=(storage.table_arn or storage.table_name,),
        )
        key = iam_utils.statement_key(unit.name, grant.actions, grant.resources, grant.effect)
        if key in self._granted:
            return self._granted[key]

        self._storage.grant_read_write(storage.handle, unit.handle)
        self._granted[key] = grant
        return grant

    def grant_logging(self, unit: Optional[ComputeUnit]) -> PermissionGrant:
        """Allow the unit to write logs.

        Scoped to every resource rather than the unit's own log group.
        """
        self._require_unit(unit)

        grant = PermissionGrant(
            unit_name=unit.name,
            kind=GRANT_LOGGING,
            actions=iam_utils.LOG_ACTIONS,
            resources=iam_utils.ALL_RESOURCES,
        )
        key = iam_utils.statement_key(unit.name, grant.actions, grant.resources, grant.effect)
        if key in self._granted:
            return self._granted[key]

        self._compute.attach_policy(
            unit.handle,
            actions=list(grant.actions),
            effect=grant.effect,
            resources=list(grant.resources),
        )
        self._granted[key] = grant
        return grant

    @staticmethod
    def _require_unit(unit: Optional[ComputeUnit]) -> None:
        if unit is None or unit.handle is None:
            raise OrderingError("Compute unit must be created before permissions are granted")
