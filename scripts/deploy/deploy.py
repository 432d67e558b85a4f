#!/usr/bin/env python3
"""Deployment script for the clean-serverless CDK application."""

import argparse
import os
import shlex
import subprocess
import sys
from typing import Mapping, Optional, Sequence

from infrastructure.config.environments import ENVIRONMENTS, get_environment_config


def run_command(
    command: Sequence[str], *, check: bool = True, env: Optional[Mapping[str, str]] = None
) -> subprocess.CompletedProcess[str]:
    """Execute a subprocess without shell interpolation."""

    printable = " ".join(shlex.quote(part) for part in command)
    print(f"Running: {printable}")

    result = subprocess.run(command, capture_output=True, text=True, env=env, check=False)

    if check and result.returncode != 0:
        print(f"Command failed with return code {result.returncode}")
        if result.stdout:
            print(f"stdout: {result.stdout}")
        if result.stderr:
            print(f"stderr: {result.stderr}")
        sys.exit(result.returncode)

    return result


def deploy_stack(environment: str, *, skip_bootstrap: bool = False) -> None:
    """Deploy the serverless API stack to the specified environment."""
    config = get_environment_config(environment)
    stack_name = config.get("stack_name") or f"CleanServerless-{environment}"
    print(f"Deploying {stack_name} to environment: {environment}")

    exec_env = {**os.environ, "CDK_DEFAULT_REGION": config.get("region", "ap-northeast-1")}

    if not skip_bootstrap:
        print("Checking CDK bootstrap status...")
        run_command(
            ["cdk", "bootstrap", "--context", f"environment={environment}"],
            check=False,
            env=exec_env,
        )

    deploy_cmd = [
        "cdk",
        "deploy",
        stack_name,
        "--context",
        f"environment={environment}",
        "--require-approval",
        "never",
    ]
    run_command(deploy_cmd, env=exec_env)
    print(f"Deployment to {environment} completed successfully!")


def main():
    """Main deployment function."""
    parser = argparse.ArgumentParser(description="Deploy the clean-serverless CDK stack")
    parser.add_argument("--environment", "-e", choices=list(ENVIRONMENTS), default="dev", help="Target environment")
    parser.add_argument("--skip-bootstrap", action="store_true", help="Do not run cdk bootstrap first")

    args = parser.parse_args()

    deploy_stack(args.environment, skip_bootstrap=args.skip_bootstrap)


if __name__ == "__main__":
    main()
