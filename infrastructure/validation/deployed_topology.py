"""Compare a deployed stack against the route table it was synthesized from.

Used by ``scripts/validate/validate_deployment.py`` after ``cdk deploy``.
Every check collects problems instead of stopping at the first one, so a
single run reports the whole drift.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from botocore.exceptions import ClientError

from infrastructure.config.settings import ProvisioningSettings
from infrastructure.core.compute import compute_unit_name
from infrastructure.core.routes import RouteTable
from infrastructure.core.topology import (
    ARCHITECTURE_ARM_64,
    DEFAULT_MEMORY_MB,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_PARTITION_KEY_NAME,
    ENV_SORT_KEY_NAME,
    ENV_TABLE_NAME,
)


class DeploymentValidationError(RuntimeError):
    """Raised when the deployed resources do not match the route table."""

    def __init__(self, problems: List[str]) -> None:
        super().__init__("Deployment validation failed:\n- " + "\n- ".join(problems))
        self.problems = problems


@dataclass
class ValidationReport:
    table_name: str
    api_id: Optional[str] = None
    functions_checked: int = 0
    methods_checked: int = 0
    problems: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "table_name": self.table_name,
            "api_id": self.api_id,
            "functions_checked": self.functions_checked,
            "methods_checked": self.methods_checked,
            "problems": list(self.problems),
        }


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def check_table(dynamodb_client, settings: ProvisioningSettings) -> List[str]:
    try:
        desc = dynamodb_client.describe_table(TableName=settings.table_name)["Table"]
    except ClientError as exc:
        if _error_code(exc) == "ResourceNotFoundException":
            return [f"Table {settings.table_name} does not exist"]
        raise

    problems: List[str] = []
    key_schema = {item["KeyType"]: item["AttributeName"] for item in desc.get("KeySchema", [])}
    if key_schema.get("HASH") != settings.partition_key_name:
        problems.append(
            f"Table partition key is {key_schema.get('HASH')!r}, expected {settings.partition_key_name!r}"
        )
    if key_schema.get("RANGE") != settings.sort_key_name:
        problems.append(f"Table sort key is {key_schema.get('RANGE')!r}, expected {settings.sort_key_name!r}")

    attribute_types = {item["AttributeName"]: item["AttributeType"] for item in desc.get("AttributeDefinitions", [])}
    for key_name in (settings.partition_key_name, settings.sort_key_name):
        if attribute_types.get(key_name, "S") != "S":
            problems.append(f"Key attribute {key_name} must be string-typed")

    billing = desc.get("BillingModeSummary", {}).get("BillingMode")
    if billing and billing != "PAY_PER_REQUEST":
        problems.append(f"Table billing mode is {billing}, expected PAY_PER_REQUEST")
    return problems


def check_functions(lambda_client, settings: ProvisioningSettings, routes: RouteTable) -> List[str]:
    problems: List[str] = []
    expected_env = {
        ENV_TABLE_NAME: settings.table_name,
        ENV_PARTITION_KEY_NAME: settings.partition_key_name,
        ENV_SORT_KEY_NAME: settings.sort_key_name,
    }
    for route in routes:
        name = compute_unit_name(route.name, settings.function_name_prefix)
        try:
            cfg = lambda_client.get_function_configuration(FunctionName=name)
        except ClientError as exc:
            if _error_code(exc) == "ResourceNotFoundException":
                problems.append(f"Function {name} does not exist")
                continue
            raise

        variables = cfg.get("Environment", {}).get("Variables", {})
        for key, value in expected_env.items():
            if variables.get(key) != value:
                problems.append(f"Function {name} has {key}={variables.get(key)!r}, expected {value!r}")
        if cfg.get("Timeout") != DEFAULT_TIMEOUT_SECONDS:
            problems.append(f"Function {name} timeout is {cfg.get('Timeout')}, expected {DEFAULT_TIMEOUT_SECONDS}")
        if cfg.get("MemorySize") != DEFAULT_MEMORY_MB:
            problems.append(f"Function {name} memory is {cfg.get('MemorySize')}, expected {DEFAULT_MEMORY_MB}")
        architectures = cfg.get("Architectures") or []
        if architectures and ARCHITECTURE_ARM_64 not in architectures:
            problems.append(f"Function {name} architecture is {architectures}, expected {ARCHITECTURE_ARM_64}")
    return problems


def find_rest_api_id(apigateway_client, api_name: str) -> Optional[str]:
    paginator = apigateway_client.get_paginator("get_rest_apis")
    for page in paginator.paginate():
        for item in page.get("items", []):
            if item.get("name") == api_name:
                return item.get("id")
    return None


def deployed_methods(apigateway_client, rest_api_id: str) -> Dict[str, Set[str]]:
    """Return ``{path: {METHOD, ...}}`` for every resource of the API."""
    methods: Dict[str, Set[str]] = {}
    paginator = apigateway_client.get_paginator("get_resources")
    for page in paginator.paginate(restApiId=rest_api_id, embed=["methods"]):
        for item in page.get("items", []):
            methods[item["path"]] = set((item.get("resourceMethods") or {}).keys())
    return methods


def check_api(apigateway_client, settings: ProvisioningSettings, routes: RouteTable) -> tuple[Optional[str], List[str]]:
    rest_api_id = find_rest_api_id(apigateway_client, settings.api_name)
    if not rest_api_id:
        return None, [f"REST API {settings.api_name} does not exist"]

    problems: List[str] = []
    methods = deployed_methods(apigateway_client, rest_api_id)
    for route in routes:
        if route.path not in methods:
            problems.append(f"Resource {route.path} does not exist")
        elif route.method.value not in methods[route.path]:
            problems.append(f"Method {route.method.value} {route.path} is not bound")

    try:
        apigateway_client.get_stage(restApiId=rest_api_id, stageName=settings.stage_name)
    except ClientError as exc:
        if _error_code(exc) != "NotFoundException":
            raise
        problems.append(f"Stage {settings.stage_name} does not exist")
    return rest_api_id, problems


def validate_deployment(
    session,
    settings: ProvisioningSettings,
    routes: RouteTable,
    *,
    raise_on_failure: bool = True,
) -> ValidationReport:
    """Run every check against the account/region of ``session``."""
    report = ValidationReport(table_name=settings.table_name)
    report.problems.extend(check_table(session.client("dynamodb"), settings))

    report.problems.extend(check_functions(session.client("lambda"), settings, routes))
    report.functions_checked = len(routes)

    api_id, api_problems = check_api(session.client("apigateway"), settings, routes)
    report.api_id = api_id
    report.problems.extend(api_problems)
    report.methods_checked = len(routes) if api_id else 0

    if raise_on_failure and report.problems:
        raise DeploymentValidationError(report.problems)
    return report
