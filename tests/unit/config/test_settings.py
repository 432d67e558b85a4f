import importlib
from typing import cast

import pytest

from infrastructure.config.environments import ENVIRONMENTS, get_environment_config
from infrastructure.config.settings import ProvisioningSettings, settings_from_config
from infrastructure.config.types import EnvironmentConfig
from infrastructure.core.errors import ConfigurationError


@pytest.mark.parametrize("environment", ENVIRONMENTS)
def test_environment_configs_resolve_to_settings(environment: str) -> None:
    settings = settings_from_config(environment, get_environment_config(environment))
    assert settings.environment == environment
    assert settings.partition_key_name == "PK"
    assert settings.sort_key_name == "SK"
    assert settings.build_target == "api"
    assert settings.stage_name == environment


def test_unknown_environment_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown environment"):
        get_environment_config("qa")


def test_environment_config_is_copied() -> None:
    config = get_environment_config("dev")
    config["table_name"] = "mutated"
    assert get_environment_config("dev")["table_name"] != "mutated"


def test_table_and_key_names_follow_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Given: DYNAMO_* 환경 변수
    When: dev 설정 모듈 재로딩
    Then: 테이블/키 이름에 반영
    """
    import infrastructure.config.environments.dev as dev_module

    monkeypatch.setenv("DYNAMO_TABLE_NAME", "custom-table")
    monkeypatch.setenv("DYNAMO_PK_NAME", "pk")
    monkeypatch.setenv("DYNAMO_SK_NAME", "sk")
    try:
        reloaded = importlib.reload(dev_module)
        assert reloaded.dev_config["table_name"] == "custom-table"
        assert reloaded.dev_config["partition_key_name"] == "pk"
        assert reloaded.dev_config["sort_key_name"] == "sk"
    finally:
        monkeypatch.undo()
        importlib.reload(dev_module)


@pytest.mark.parametrize("key", ["table_name", "partition_key_name", "sort_key_name"])
def test_missing_required_value_is_configuration_error(key: str) -> None:
    config = cast(
        EnvironmentConfig,
        {"region": "ap-northeast-1", "table_name": "t", "partition_key_name": "PK", "sort_key_name": "SK"},
    )
    config[key] = "   "  # type: ignore[literal-required]
    with pytest.raises(ConfigurationError, match=key):
        settings_from_config("dev", config)


def test_optional_values_fall_back_to_defaults() -> None:
    config = cast(
        EnvironmentConfig,
        {"region": "ap-northeast-1", "table_name": "t", "partition_key_name": "PK", "sort_key_name": "SK"},
    )
    settings = settings_from_config("dev", config)
    assert settings.api_name == "CleanServerlessBookSampleAPI"
    assert settings.stage_name == "dev"
    assert settings.function_name_prefix == "clean-serverless"
    assert settings.payload_directory == "../app"


def test_settings_are_immutable_and_validated() -> None:
    settings = ProvisioningSettings(environment="dev", table_name=" t ", partition_key_name="PK", sort_key_name="SK")
    assert settings.table_name == "t"
    with pytest.raises(Exception):
        settings.table_name = "other"  # type: ignore[misc]
    with pytest.raises(ConfigurationError):
        ProvisioningSettings(environment="dev", table_name="t", partition_key_name="PK", sort_key_name="SK", stage_name="")
