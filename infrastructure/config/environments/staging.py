"""Staging environment configuration."""

import os

staging_config = {
    "account_id": os.environ.get("CDK_DEFAULT_ACCOUNT"),
    "region": os.environ.get("CDK_DEFAULT_REGION", "ap-northeast-1"),
    "stack_name": "CleanServerless-staging",
    "table_name": os.environ.get("DYNAMO_TABLE_NAME", "clean-serverless-staging"),
    "partition_key_name": os.environ.get("DYNAMO_PK_NAME", "PK"),
    "sort_key_name": os.environ.get("DYNAMO_SK_NAME", "SK"),
    "api_name": "CleanServerlessBookSampleAPI-staging",
    "stage_name": "staging",
    "function_name_prefix": "clean-serverless-staging",
    "payload_directory": os.environ.get("PAYLOAD_DIRECTORY", "../app"),
    "build_target": "api",
    "tags": {
        "Environment": "staging",
        "Project": "CleanServerless",
    },
}
