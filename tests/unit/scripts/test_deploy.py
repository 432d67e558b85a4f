import runpy
import subprocess
from pathlib import Path
from typing import List

import pytest

_SCRIPT = Path(__file__).resolve().parents[3] / "scripts" / "deploy" / "deploy.py"


def _completed(returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr="")


def test_deploy_runs_bootstrap_then_named_stack(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[List[str]] = []

    def fake_run(command, **kwargs):
        calls.append(list(command))
        return _completed()

    monkeypatch.setattr(subprocess, "run", fake_run)
    module = runpy.run_path(str(_SCRIPT))

    module["deploy_stack"]("staging")

    assert calls[0][:2] == ["cdk", "bootstrap"]
    assert calls[1][:3] == ["cdk", "deploy", "CleanServerless-staging"]
    assert "environment=staging" in calls[1]


def test_deploy_exits_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", lambda command, **kwargs: _completed(returncode=3))
    module = runpy.run_path(str(_SCRIPT))

    with pytest.raises(SystemExit) as excinfo:
        module["deploy_stack"]("dev", skip_bootstrap=True)
    assert excinfo.value.code == 3
