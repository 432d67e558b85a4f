"""CDK implementations of the platform capabilities.

Each capability adds constructs under a single scope (normally the stack), so
running the orchestrator against these adapters builds the construct tree
that ``cdk synth`` turns into one CloudFormation template.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from aws_cdk import (
    Duration,
    RemovalPolicy,
    aws_apigateway as apigw,
    aws_dynamodb as dynamodb,
    aws_iam as iam,
    aws_lambda as lambda_,
)
from constructs import Construct

from infrastructure.core.iam import utils as iam_utils
from infrastructure.core.topology import ARCHITECTURE_ARM_64

_BILLING_MODES = {
    "PAY_PER_REQUEST": dynamodb.BillingMode.PAY_PER_REQUEST,
}

_REMOVAL_POLICIES = {
    "DESTROY": RemovalPolicy.DESTROY,
}


def _architecture(name: str) -> lambda_.Architecture:
    if str(name).lower() == ARCHITECTURE_ARM_64:
        return lambda_.Architecture.ARM_64
    if str(name).lower() in {"x86_64", "x86-64", "amd64"}:
        return lambda_.Architecture.X86_64
    raise ValueError(f"Unsupported architecture: {name}")


class CdkStorage:
    def __init__(self, scope: Construct, construct_id: str = "ResourceTable") -> None:
        self._scope = scope
        self._construct_id = construct_id

    def create_table(
        self,
        *,
        partition_key: str,
        sort_key: str,
        billing_mode: str,
        removal_policy: str,
        table_name: Optional[str] = None,
    ) -> dynamodb.Table:
        return dynamodb.Table(
            self._scope,
            self._construct_id,
            table_name=table_name,
            partition_key=dynamodb.Attribute(name=partition_key, type=dynamodb.AttributeType.STRING),
            sort_key=dynamodb.Attribute(name=sort_key, type=dynamodb.AttributeType.STRING),
            billing_mode=_BILLING_MODES[billing_mode],
            removal_policy=_REMOVAL_POLICIES[removal_policy],
        )

    def table_name(self, table: dynamodb.Table) -> str:
        return table.table_name

    def table_arn(self, table: dynamodb.Table) -> str:
        return table.table_arn

    def grant_read_write(self, table: dynamodb.Table, principal: iam.IGrantable) -> None:
        table.grant_read_write_data(principal)


class CdkCompute:
    """Docker image Lambda functions built from one shared payload directory."""

    def __init__(self, scope: Construct) -> None:
        self._scope = scope

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
    ) -> lambda_.DockerImageFunction:
        return lambda_.DockerImageFunction(
            self._scope,
            logical_id,
            function_name=name,
            code=lambda_.DockerImageCode.from_image_asset(payload_ref, target=build_target),
            architecture=_architecture(architecture),
            timeout=Duration.seconds(timeout_seconds),
            memory_size=memory_mb,
            environment=dict(environment),
        )

    def attach_policy(
        self,
        unit: lambda_.DockerImageFunction,
        *,
        actions: Sequence[str],
        effect: str,
        resources: Sequence[str],
    ) -> None:
        allow = iam_utils.normalize_effect(effect) == iam_utils.EFFECT_ALLOW
        unit.add_to_role_policy(
            iam.PolicyStatement(
                actions=iam_utils.dedupe(actions),
                effect=iam.Effect.ALLOW if allow else iam.Effect.DENY,
                resources=iam_utils.dedupe(resources),
            )
        )


class CdkApi:
    def __init__(self, scope: Construct, construct_id: str = "CleanServerlessBookSampleApi") -> None:
        self._scope = scope
        self._construct_id = construct_id

    def create_api(self, *, name: str, stage_name: str) -> apigw.RestApi:
        return apigw.RestApi(
            self._scope,
            self._construct_id,
            rest_api_name=name,
            deploy_options=apigw.StageOptions(stage_name=stage_name),
        )

    def resolve_path(self, api: apigw.RestApi, path: str) -> apigw.IResource:
        if path == "/":
            return api.root
        return api.root.resource_for_path(path)

    def bind_method(self, node: apigw.IResource, method: str, target: lambda_.IFunction) -> None:
        node.add_method(method, apigw.LambdaIntegration(target))
