"""Typed configuration contracts for environment-specific settings."""

from __future__ import annotations

from typing import Dict, NotRequired, Required, TypedDict


class EnvironmentConfig(TypedDict, total=False):
    """Strongly-typed environment configuration contract."""

    region: Required[str]
    account_id: NotRequired[str | None]

    stack_name: NotRequired[str]

    table_name: Required[str]
    partition_key_name: Required[str]
    sort_key_name: Required[str]

    api_name: NotRequired[str]
    stage_name: NotRequired[str]

    function_name_prefix: NotRequired[str]
    payload_directory: NotRequired[str]
    build_target: NotRequired[str]

    tags: NotRequired[Dict[str, str]]
