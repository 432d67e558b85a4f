#!/usr/bin/env python3
"""Validate a deployed clean-serverless stack against the route table.

Checks
------
1. The DynamoDB table exists with the configured PK/SK string key schema.
2. Every route has its Lambda function with the table environment bindings
   and the fixed timeout/memory/architecture.
3. The REST API exists, has the configured stage, and every route's method
   is bound on its resource path.

A machine-readable summary is written for CI workflows.
"""

from __future__ import annotations

import argparse
import json
import sys

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from infrastructure.config.environments import ENVIRONMENTS, get_environment_config
from infrastructure.config.settings import settings_from_config
from infrastructure.core.routes import DEFAULT_ROUTES
from infrastructure.validation.deployed_topology import validate_deployment


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate the clean-serverless stack post-deploy")
    parser.add_argument("--environment", "-e", choices=list(ENVIRONMENTS), default="dev", help="Target environment")
    parser.add_argument("--region", help="AWS region override")
    parser.add_argument("--output-json", default="deployment_validation_summary.json", help="Summary JSON output path")
    args = parser.parse_args()

    config = get_environment_config(args.environment)
    settings = settings_from_config(args.environment, config)
    session = boto3.Session(region_name=args.region or config.get("region"))

    try:
        report = validate_deployment(session, settings, DEFAULT_ROUTES, raise_on_failure=False)
    except (BotoCoreError, ClientError) as exc:
        print(f"Validation could not complete: {exc}", file=sys.stderr)
        return 2

    summary = report.to_dict()
    with open(args.output_json, "w", encoding="utf-8") as fh:
        json.dump(summary, fh, indent=2)

    if report.ok:
        print(f"✅ {report.functions_checked} functions and {report.methods_checked} methods match the route table")
        return 0

    print("❌ Deployment does not match the route table:")
    for problem in report.problems:
        print(f"  - {problem}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
