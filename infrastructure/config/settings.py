"""Resolved provisioning settings threaded through the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass

from infrastructure.config.types import EnvironmentConfig
from infrastructure.core.compute import DEFAULT_BUILD_TARGET, DEFAULT_FUNCTION_NAME_PREFIX
from infrastructure.core.errors import ConfigurationError

DEFAULT_API_NAME = "CleanServerlessBookSampleAPI"
DEFAULT_STAGE_NAME = "dev"
DEFAULT_PAYLOAD_DIRECTORY = "../app"


@dataclass(frozen=True)
class ProvisioningSettings:
    environment: str
    table_name: str
    partition_key_name: str
    sort_key_name: str
    api_name: str = DEFAULT_API_NAME
    stage_name: str = DEFAULT_STAGE_NAME
    function_name_prefix: str = DEFAULT_FUNCTION_NAME_PREFIX
    payload_directory: str = DEFAULT_PAYLOAD_DIRECTORY
    build_target: str = DEFAULT_BUILD_TARGET

    def __post_init__(self) -> None:
        for field_name in (
            "environment",
            "table_name",
            "partition_key_name",
            "sort_key_name",
            "api_name",
            "stage_name",
            "payload_directory",
            "build_target",
        ):
            value = str(getattr(self, field_name) or "").strip()
            if not value:
                raise ConfigurationError(f"Configuration value '{field_name}' must not be empty")
            object.__setattr__(self, field_name, value)
        object.__setattr__(self, "function_name_prefix", str(self.function_name_prefix or "").strip())


def _required(config: EnvironmentConfig, key: str) -> str:
    value = str(config.get(key) or "").strip()
    if not value:
        raise ConfigurationError(f"Required configuration '{key}' is missing or empty")
    return value


def settings_from_config(environment: str, config: EnvironmentConfig) -> ProvisioningSettings:
    """Build validated settings from an environment config mapping."""
    return ProvisioningSettings(
        environment=environment,
        table_name=_required(config, "table_name"),
        partition_key_name=_required(config, "partition_key_name"),
        sort_key_name=_required(config, "sort_key_name"),
        api_name=str(config.get("api_name") or DEFAULT_API_NAME),
        stage_name=str(config.get("stage_name") or environment),
        function_name_prefix=str(config.get("function_name_prefix", DEFAULT_FUNCTION_NAME_PREFIX) or ""),
        payload_directory=str(config.get("payload_directory") or DEFAULT_PAYLOAD_DIRECTORY),
        build_target=str(config.get("build_target") or DEFAULT_BUILD_TARGET),
    )
