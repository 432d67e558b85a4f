"""Platform capability interfaces consumed by the composition engine.

The engine never talks to a cloud SDK directly. Each provisioning step goes
through one of these protocols so the same composition logic can target the
CDK construct tree or an in-memory dry-run plan.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence


class StorageCapability(Protocol):
    def create_table(
        self,
        *,
        partition_key: str,
        sort_key: str,
        billing_mode: str,
        removal_policy: str,
        table_name: Optional[str] = None,
    ) -> Any: ...

    def table_name(self, table: Any) -> str: ...

    def table_arn(self, table: Any) -> str: ...

    def grant_read_write(self, table: Any, principal: Any) -> None: ...


class ComputeCapability(Protocol):
    def create_unit(
        self,
        *,
        logical_id: str,
        name: str,
        payload_ref: str,
        build_target: str,
        architecture: str,
        timeout_seconds: int,
        memory_mb: int,
        environment: Mapping[str, str],
    ) -> Any: ...

    def attach_policy(self, unit: Any, *, actions: Sequence[str], effect: str, resources: Sequence[str]) -> None: ...


class ApiCapability(Protocol):
    def create_api(self, *, name: str, stage_name: str) -> Any: ...

    def resolve_path(self, api: Any, path: str) -> Any: ...

    def bind_method(self, node: Any, method: str, target: Any) -> None: ...
