"""Keyed storage provisioning."""

from __future__ import annotations

from typing import Optional

from infrastructure.core.capabilities import StorageCapability
from infrastructure.core.errors import ConfigurationError
from infrastructure.core.topology import (
    BILLING_MODE_PAY_PER_REQUEST,
    REMOVAL_POLICY_DESTROY,
    StorageResource,
)


class StorageProvisioner:
    """Create the single PK/SK table shared by every compute unit."""

    def __init__(self, capability: StorageCapability) -> None:
        self._capability = capability

    def provision_storage(
        self,
        partition_key_name: str,
        sort_key_name: str,
        table_identity_hint: Optional[str] = None,
    ) -> StorageResource:
        partition_key = str(partition_key_name or "").strip()
        sort_key = str(sort_key_name or "").strip()
        if not partition_key:
            raise ConfigurationError("Partition key name must be provided")
        if not sort_key:
            raise ConfigurationError("Sort key name must be provided")
        if partition_key == sort_key:
            raise ConfigurationError("Partition and sort key names must differ")

        hint = str(table_identity_hint or "").strip() or None
        table = self._capability.create_table(
            partition_key=partition_key,
            sort_key=sort_key,
            billing_mode=BILLING_MODE_PAY_PER_REQUEST,
            removal_policy=REMOVAL_POLICY_DESTROY,
            table_name=hint,
        )
        return StorageResource(
            partition_key_name=partition_key,
            sort_key_name=sort_key,
            table_name=self._capability.table_name(table),
            handle=table,
            table_arn=self._capability.table_arn(table),
        )
