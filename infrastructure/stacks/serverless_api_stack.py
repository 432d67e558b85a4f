"""Serverless API stack: DynamoDB table, REST API and one Lambda per route."""

from typing import Optional

from aws_cdk import CfnOutput, Fn, Stack
from constructs import Construct

from infrastructure.config.settings import ProvisioningSettings, settings_from_config
from infrastructure.config.types import EnvironmentConfig
from infrastructure.core.orchestrator import ProvisioningOrchestrator
from infrastructure.core.routes import DEFAULT_ROUTES, RouteTable
from infrastructure.core.topology import Topology
from infrastructure.platform.cdk import CdkApi, CdkCompute, CdkStorage


class ServerlessApiStack(Stack):
    """Provision the route table into a single CloudFormation stack."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        environment: str,
        config: EnvironmentConfig,
        routes: Optional[RouteTable] = None,
        settings: Optional[ProvisioningSettings] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = environment
        self.config = config
        self.settings = settings or settings_from_config(environment, config)
        self.routes = routes if routes is not None else DEFAULT_ROUTES

        orchestrator = ProvisioningOrchestrator(
            storage=CdkStorage(self),
            compute=CdkCompute(self),
            api=CdkApi(self),
            settings=self.settings,
            deployment_id=construct_id,
        )
        self.topology: Topology = orchestrator.provision(self.routes)

        self.table = self.topology.storage.handle
        self.api = self.topology.api.handle
        self.functions = {unit.route_name: unit.handle for unit in self.topology.units}

        self._create_outputs()

    def _create_outputs(self) -> None:
        """Create CloudFormation outputs."""
        CfnOutput(
            self,
            "ApiUrl",
            value=self.api.url,
            description="Base URL of the deployed API stage",
        )

        CfnOutput(
            self,
            "TableName",
            value=self.table.table_name,
            description="DynamoDB table name",
        )

        CfnOutput(
            self,
            "FunctionNames",
            value=Fn.join(",", [function.function_name for function in self.functions.values()]),
            description="Lambda function names, one per route",
        )
