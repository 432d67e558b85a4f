#!/usr/bin/env python3
"""
Clean Serverless CDK App
One DynamoDB table, one REST API and one container-image Lambda per route.
"""

import aws_cdk as cdk

from infrastructure.stacks.serverless_api_stack import ServerlessApiStack

# Configuration
from infrastructure.config.environments import get_environment_config

app = cdk.App()

# Get environment configuration
environment = app.node.try_get_context("environment") or "dev"
config = get_environment_config(environment)

# CDK environment (account/region)
cdk_env = cdk.Environment(account=config.get("account_id"), region=config.get("region", "ap-northeast-1"))

# ========================================
# SERVERLESS API
# ========================================

api_stack = ServerlessApiStack(
    app,
    config.get("stack_name") or f"CleanServerless-{environment}",
    environment=environment,
    config=config,
    env=cdk_env,
)

# ========================================
# TAGGING STRATEGY
# ========================================

cdk.Tags.of(app).add("Environment", environment)
cdk.Tags.of(app).add("ManagedBy", "CDK")
for key, value in (config.get("tags") or {}).items():
    cdk.Tags.of(api_stack).add(key, str(value))

app.synth()
