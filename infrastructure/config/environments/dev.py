"""Development environment configuration."""

import os

dev_config = {
    "account_id": os.environ.get("CDK_DEFAULT_ACCOUNT"),
    "region": os.environ.get("CDK_DEFAULT_REGION", "ap-northeast-1"),
    "stack_name": "CleanServerless-dev",
    # Key schema shared with the compute payload
    "table_name": os.environ.get("DYNAMO_TABLE_NAME", "clean-serverless-dev"),
    "partition_key_name": os.environ.get("DYNAMO_PK_NAME", "PK"),
    "sort_key_name": os.environ.get("DYNAMO_SK_NAME", "SK"),
    # API Gateway
    "api_name": "CleanServerlessBookSampleAPI",
    "stage_name": "dev",
    # Lambda (container image built from the payload directory)
    "function_name_prefix": "clean-serverless",
    "payload_directory": os.environ.get("PAYLOAD_DIRECTORY", "../app"),
    "build_target": "api",
    "tags": {
        "Environment": "dev",
        "Project": "CleanServerless",
    },
}
