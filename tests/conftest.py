from __future__ import annotations

import sys
from pathlib import Path

import pytest

BUILD_ENV_VARS = (
    "IsAutomatedBuild",
    "IsPullRequestBuild",
    "IsReleaseBuild",
    "CiBuildName",
    "CiBuildIndex",
    "BuildTime",
    "BuildMeta",
    "CI",
    "GITHUB_EVENT_NAME",
)


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture
def clean_build_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Empty build environment rooted in a directory with no .env file.

    Each variable is set then removed so monkeypatch also undoes values a
    loaded .env file writes into os.environ.
    """
    for name in BUILD_ENV_VARS:
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
