#!/usr/bin/env python3
"""Print the topology the stack would provision, without CDK or AWS access."""

from __future__ import annotations

import argparse
import json
import sys

from infrastructure.config.environments import ENVIRONMENTS, get_environment_config
from infrastructure.config.settings import settings_from_config
from infrastructure.core.errors import ProvisioningError
from infrastructure.core.orchestrator import ProvisioningOrchestrator
from infrastructure.core.routes import DEFAULT_ROUTES
from infrastructure.platform.dry_run import DryRunApi, DryRunCompute, DryRunStorage


def main() -> int:
    parser = argparse.ArgumentParser(description="Plan the clean-serverless topology")
    parser.add_argument("--environment", "-e", choices=list(ENVIRONMENTS), default="dev", help="Target environment")
    parser.add_argument("--output", "-o", help="Write the plan JSON to this path instead of stdout")
    args = parser.parse_args()

    try:
        settings = settings_from_config(args.environment, get_environment_config(args.environment))
        orchestrator = ProvisioningOrchestrator(
            storage=DryRunStorage(),
            compute=DryRunCompute(),
            api=DryRunApi(),
            settings=settings,
            deployment_id=f"plan-{args.environment}",
        )
        topology = orchestrator.provision(DEFAULT_ROUTES)
    except ProvisioningError as exc:
        print(f"Planning failed: {exc}", file=sys.stderr)
        return 1

    document = json.dumps(topology.summary(), indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(document + "\n")
        print(f"Plan written to {args.output}")
    else:
        print(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
