"""Production environment configuration."""

import os

prod_config = {
    "account_id": os.environ.get("CDK_DEFAULT_ACCOUNT"),
    "region": os.environ.get("CDK_DEFAULT_REGION", "ap-northeast-1"),
    "stack_name": "CleanServerless-prod",
    "table_name": os.environ.get("DYNAMO_TABLE_NAME", "clean-serverless-prod"),
    "partition_key_name": os.environ.get("DYNAMO_PK_NAME", "PK"),
    "sort_key_name": os.environ.get("DYNAMO_SK_NAME", "SK"),
    "api_name": "CleanServerlessBookSampleAPI-prod",
    "stage_name": "prod",
    "function_name_prefix": "clean-serverless-prod",
    "payload_directory": os.environ.get("PAYLOAD_DIRECTORY", "../app"),
    "build_target": "api",
    "tags": {
        "Environment": "prod",
        "Project": "CleanServerless",
        "CostCenter": "Engineering",
    },
}
