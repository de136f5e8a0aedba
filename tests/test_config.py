from __future__ import annotations

from pathlib import Path

import pytest

from csemver.config import VersionConfig, load_env, load_settings
from csemver.errors import UnknownPreReleaseError


def test_version_config_accepts_property_names() -> None:
    cfg = VersionConfig.model_validate(
        {
            "BuildMajor": "20",
            "BuildMinor": 1,
            "BuildPatch": " 4 ",
            "PreReleaseName": "alpha",
            "PreReleaseNumber": "",
            "PreReleaseFix": None,
            "BuildMeta": "  ",
        }
    )
    assert cfg.build_major == 20
    assert cfg.build_patch == 4
    assert cfg.prerelease_number == 0
    assert cfg.prerelease_fix == 0
    assert cfg.build_metadata is None
    v = cfg.to_version()
    assert v.ordered_version == 800_010_800_330_005


def test_version_config_accepts_field_names() -> None:
    cfg = VersionConfig(
        build_major=1,
        build_minor=2,
        build_patch=3,
        ci_build_name="BLD",
        ci_build_index="abc123",
    )
    assert cfg.to_version().render() == "1.2.3--ci.abc123.BLD"


def test_version_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError):
        VersionConfig.model_validate({"BuildMajor": 1, "BuildMinor": 2, "BuildPatch": 3, "Bogus": 1})


def test_version_config_rejects_non_integer() -> None:
    with pytest.raises(ValueError):
        VersionConfig.model_validate({"BuildMajor": "abc", "BuildMinor": 2, "BuildPatch": 3})


def test_version_config_unknown_prerelease_name() -> None:
    cfg = VersionConfig(build_major=1, build_minor=0, build_patch=0, prerelease_name="omega")
    with pytest.raises(UnknownPreReleaseError):
        cfg.to_version()


def test_load_settings_defaults_to_local(clean_build_env: Path) -> None:
    settings = load_settings()
    assert not settings.is_automated_build
    assert not settings.is_pull_request_build
    assert not settings.is_release_build
    assert settings.ci_build_name is None
    assert settings.build_time is None


def test_load_settings_reads_flags(clean_build_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IsAutomatedBuild", "true")
    monkeypatch.setenv("IsReleaseBuild", "1")
    monkeypatch.setenv("CiBuildName", " QRP ")
    monkeypatch.setenv("BuildMeta", "sha.abc")
    settings = load_settings()
    assert settings.is_automated_build
    assert settings.is_release_build
    assert not settings.is_pull_request_build
    assert settings.ci_build_name == "QRP"
    assert settings.build_metadata == "sha.abc"


def test_load_settings_falls_back_to_runner_markers(
    clean_build_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CI", "true")
    monkeypatch.setenv("GITHUB_EVENT_NAME", "pull_request")
    settings = load_settings()
    assert settings.is_automated_build
    assert settings.is_pull_request_build


def test_explicit_flag_overrides_runner_marker(
    clean_build_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CI", "true")
    monkeypatch.setenv("IsAutomatedBuild", "false")
    assert not load_settings().is_automated_build


def test_load_settings_from_env_file(clean_build_env: Path) -> None:
    env_file = clean_build_env / "build.env"
    env_file.write_text("IsAutomatedBuild=true\nCiBuildName=NIGHTLY\nCiBuildIndex=42\n", encoding="utf-8")
    settings = load_settings(env_file)
    assert settings.is_automated_build
    assert settings.ci_build_name == "NIGHTLY"
    assert settings.ci_build_index == "42"


def test_load_env_finds_dotenv_in_cwd(clean_build_env: Path) -> None:
    (clean_build_env / ".env").write_text("BuildMeta=from-dotenv\n", encoding="utf-8")
    found = load_env()
    assert found is not None
    assert found.name == ".env"
    assert load_settings().build_metadata == "from-dotenv"
