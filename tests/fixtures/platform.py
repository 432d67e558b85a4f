from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


@dataclass
class Handle:
    kind: str
    name: str
    props: Dict[str, Any] = field(default_factory=dict)


class CallLog:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def record(self, op: str, *args: Any) -> None:
        self.calls.append((op, args))

    def ops(self) -> List[str]:
        return [op for op, _ in self.calls]

    def count(self, op: str) -> int:
        return sum(1 for name, _ in self.calls if name == op)


class StorageStub:
    def __init__(self, log: CallLog, *, fail_on: Optional[str] = None) -> None:
        self.log = log
        self.fail_on = fail_on

    def create_table(
        self,
        *,
        partition_key: str,
        sort_key: str,
        billing_mode: str,
        removal_policy: str,
        table_name: Optional[str] = None,
    ) -> Handle:
        self.log.record("create_table", partition_key, sort_key, billing_mode, removal_policy, table_name)
        if self.fail_on == "create_table":
            raise RuntimeError("LimitExceededException: table quota")
        return Handle("table", table_name or "generated-table")

    def table_name(self, table: Handle) -> str:
        return table.name

    def table_arn(self, table: Handle) -> str:
        return f"arn:aws:dynamodb:::table/{table.name}"

    def grant_read_write(self, table: Handle, principal: Handle) -> None:
        self.log.record("grant_read_write", table.name, principal.name)
        if self.fail_on == "grant_read_write":
            raise RuntimeError("AccessDenied")


class ComputeStub:
    def __init__(self, log: CallLog, *, fail_on_unit: Optional[str] = None) -> None:
        self.log = log
        self.fail_on_unit = fail_on_unit

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
    ) -> Handle:
        self.log.record("create_unit", name)
        if name == self.fail_on_unit:
            raise RuntimeError(f"CodeStorageExceededException: {name}")
        return Handle(
            "function",
            name,
            {
                "logical_id": logical_id,
                "payload_ref": payload_ref,
                "build_target": build_target,
                "architecture": architecture,
                "timeout_seconds": timeout_seconds,
                "memory_mb": memory_mb,
                "environment": dict(environment),
            },
        )

    def attach_policy(self, unit: Handle, *, actions: Sequence[str], effect: str, resources: Sequence[str]) -> None:
        self.log.record("attach_policy", unit.name, tuple(actions), effect, tuple(resources))


class ApiStub:
    def __init__(self, log: CallLog) -> None:
        self.log = log
        self.nodes: Dict[str, Handle] = {}

    def create_api(self, *, name: str, stage_name: str) -> Handle:
        self.log.record("create_api", name, stage_name)
        return Handle("api", name, {"stage": stage_name})

    def resolve_path(self, api: Handle, path: str) -> Handle:
        self.log.record("resolve_path", path)
        node = self.nodes.get(path)
        if node is None:
            node = Handle("node", path, {"methods": {}})
            self.nodes[path] = node
        return node

    def bind_method(self, node: Handle, method: str, target: Handle) -> None:
        self.log.record("bind_method", node.name, method, target.name)
        methods = node.props["methods"]
        if method in methods:
            raise RuntimeError(f"There is already a Construct with name '{method}' in Resource [{node.name}]")
        methods[method] = target.name
