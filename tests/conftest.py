import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

# Ensure project root is on sys.path so 'infrastructure' and 'tests' import
_repo_root = Path(__file__).resolve().parents[1]
_repo_root_str = str(_repo_root)
if _repo_root_str not in sys.path:
    sys.path.insert(0, _repo_root_str)

from infrastructure.config.settings import ProvisioningSettings  # noqa: E402


@pytest.fixture(autouse=True)
def aws_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure default AWS region/credentials for moto and clear config overrides."""
    monkeypatch.setenv("AWS_REGION", os.environ.get("AWS_REGION", "us-east-1"))
    monkeypatch.setenv("AWS_DEFAULT_REGION", os.environ.get("AWS_DEFAULT_REGION", "us-east-1"))
    # Provide dummy credentials so botocore signing doesn't fail under moto
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")

    # Table/key overrides must not leak from the developer shell into tests
    monkeypatch.delenv("DYNAMO_TABLE_NAME", raising=False)
    monkeypatch.delenv("DYNAMO_PK_NAME", raising=False)
    monkeypatch.delenv("DYNAMO_SK_NAME", raising=False)
    yield


@pytest.fixture
def payload_dir(tmp_path: Path) -> Path:
    """Minimal container payload directory with an ``api`` build stage."""
    directory = tmp_path / "app"
    directory.mkdir()
    (directory / "Dockerfile").write_text(
        "FROM public.ecr.aws/lambda/python:3.12 AS api\n" 'CMD ["handler.main"]\n',
        encoding="utf-8",
    )
    return directory


@pytest.fixture
def settings(payload_dir: Path) -> ProvisioningSettings:
    return ProvisioningSettings(
        environment="dev",
        table_name="clean-serverless-test",
        partition_key_name="PK",
        sort_key_name="SK",
        api_name="CleanServerlessBookSampleAPI",
        stage_name="dev",
        function_name_prefix="clean-serverless",
        payload_directory=str(payload_dir),
        build_target="api",
    )


def pytest_configure(config):
    """Configure pytest with essential markers."""
    config.addinivalue_line("markers", "unit: unit test")
    config.addinivalue_line("markers", "infrastructure: CDK synth test")


def pytest_collection_modifyitems(config, items):
    """Add markers based on file location."""
    rootdir = Path(config.rootdir)

    for item in items:
        try:
            rel_path = Path(item.fspath).relative_to(rootdir)
        except ValueError:
            continue
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        if "infrastructure" in rel_path.parts:
            item.add_marker(pytest.mark.infrastructure)
