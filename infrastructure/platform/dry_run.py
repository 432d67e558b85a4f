"""In-memory capabilities that record a provisioning plan without a platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


@dataclass
class PlannedTable:
    name: str
    partition_key: str
    sort_key: str
    billing_mode: str
    removal_policy: str
    readers_writers: List[str] = field(default_factory=list)


@dataclass
class PlannedFunction:
    logical_id: str
    name: str
    payload_ref: str
    build_target: str
    architecture: str
    timeout_seconds: int
    memory_mb: int
    environment: Dict[str, str]
    policies: List[Tuple[str, Tuple[str, ...], Tuple[str, ...]]] = field(default_factory=list)


@dataclass
class PlannedNode:
    path: str
    methods: Dict[str, str] = field(default_factory=dict)


@dataclass
class PlannedApi:
    name: str
    stage_name: str
    nodes: Dict[str, PlannedNode] = field(default_factory=dict)


class DryRunStorage:
    def __init__(self) -> None:
        self.tables: List[PlannedTable] = []

    def create_table(
        self,
        *,
        partition_key: str,
        sort_key: str,
        billing_mode: str,
        removal_policy: str,
        table_name: Optional[str] = None,
    ) -> PlannedTable:
        table = PlannedTable(
            name=table_name or f"table-{len(self.tables) + 1}",
            partition_key=partition_key,
            sort_key=sort_key,
            billing_mode=billing_mode,
            removal_policy=removal_policy,
        )
        self.tables.append(table)
        return table

    def table_name(self, table: PlannedTable) -> str:
        return table.name

    def table_arn(self, table: PlannedTable) -> str:
        return f"arn:aws:dynamodb:::table/{table.name}"

    def grant_read_write(self, table: PlannedTable, principal: PlannedFunction) -> None:
        table.readers_writers.append(principal.name)


class DryRunCompute:
    def __init__(self) -> None:
        self.functions: Dict[str, PlannedFunction] = {}

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
    ) -> PlannedFunction:
        if name in self.functions:
            raise ValueError(f"Function already exists: {name}")
        function = PlannedFunction(
            logical_id=logical_id,
            name=name,
            payload_ref=payload_ref,
            build_target=build_target,
            architecture=architecture,
            timeout_seconds=timeout_seconds,
            memory_mb=memory_mb,
            environment=dict(environment),
        )
        self.functions[name] = function
        return function

    def attach_policy(
        self,
        unit: PlannedFunction,
        *,
        actions: Sequence[str],
        effect: str,
        resources: Sequence[str],
    ) -> None:
        unit.policies.append((effect, tuple(actions), tuple(resources)))


class DryRunApi:
    def __init__(self) -> None:
        self.apis: List[PlannedApi] = []

    def create_api(self, *, name: str, stage_name: str) -> PlannedApi:
        api = PlannedApi(name=name, stage_name=stage_name)
        self.apis.append(api)
        return api

    def resolve_path(self, api: PlannedApi, path: str) -> PlannedNode:
        node = api.nodes.get(path)
        if node is None:
            node = PlannedNode(path=path)
            api.nodes[path] = node
        return node

    def bind_method(self, node: PlannedNode, method: str, target: Any) -> None:
        if method in node.methods:
            raise ValueError(f"There is already a Construct with name '{method}' in Resource {node.path}")
        node.methods[method] = getattr(target, "name", str(target))
