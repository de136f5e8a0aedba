from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from csemver.prerelease import PreReleaseVersion
from csemver.version import CSemVer

_TRUE_VALUES = {"1", "true", "yes", "on"}


class VersionConfig(BaseModel):
    """Configuration record handed to the version engine.

    Accepts both snake_case keys and the PascalCase build property names used
    by version descriptors and build tooling.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    build_major: int = Field(validation_alias=AliasChoices("build_major", "BuildMajor"))
    build_minor: int = Field(validation_alias=AliasChoices("build_minor", "BuildMinor"))
    build_patch: int = Field(validation_alias=AliasChoices("build_patch", "BuildPatch"))
    prerelease_name: str | None = Field(
        default=None, validation_alias=AliasChoices("prerelease_name", "PreReleaseName")
    )
    prerelease_number: int = Field(
        default=0, validation_alias=AliasChoices("prerelease_number", "PreReleaseNumber")
    )
    prerelease_fix: int = Field(
        default=0, validation_alias=AliasChoices("prerelease_fix", "PreReleaseFix")
    )
    build_metadata: str | None = Field(
        default=None,
        validation_alias=AliasChoices("build_metadata", "BuildMeta", "BuildMetadata"),
    )
    ci_build_name: str | None = Field(
        default=None, validation_alias=AliasChoices("ci_build_name", "CiBuildName")
    )
    ci_build_index: str | None = Field(
        default=None, validation_alias=AliasChoices("ci_build_index", "CiBuildIndex")
    )

    @field_validator(
        "prerelease_name", "build_metadata", "ci_build_name", "ci_build_index", mode="before"
    )
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            s = v.strip()
            return s or None
        return v

    @field_validator("build_major", "build_minor", "build_patch", mode="before")
    @classmethod
    def _strip_int_strings(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("prerelease_number", "prerelease_fix", mode="before")
    @classmethod
    def _blank_is_zero(cls, v: Any) -> Any:
        if v is None:
            return 0
        if isinstance(v, str):
            return v.strip() or 0
        return v

    def to_version(self) -> CSemVer:
        prerelease = None
        if self.prerelease_name:
            prerelease = PreReleaseVersion.from_name(
                self.prerelease_name, self.prerelease_number, self.prerelease_fix
            )
        return CSemVer(
            major=self.build_major,
            minor=self.build_minor,
            patch=self.build_patch,
            prerelease=prerelease,
            build_metadata=self.build_metadata or "",
            ci_build_name=self.ci_build_name,
            ci_build_index=self.ci_build_index,
        )


def load_env(env_file: Path | None = None) -> Path | None:
    # An explicit file wins; otherwise search upwards from the working directory.
    if env_file is not None:
        load_dotenv(env_file)
        return env_file
    found = find_dotenv(usecwd=True)
    if not found:
        return None
    load_dotenv(found)
    return Path(found)


def _env_str(name: str) -> str | None:
    return (os.getenv(name) or "").strip() or None


def _env_flag(name: str, *, default: bool = False) -> bool:
    raw = _env_str(name)
    if raw is None:
        return default
    return raw.lower() in _TRUE_VALUES


@dataclass(frozen=True)
class BuildSettings:
    is_automated_build: bool
    is_pull_request_build: bool
    is_release_build: bool
    ci_build_name: str | None
    ci_build_index: str | None
    build_time: str | None
    build_metadata: str | None


def load_settings(env_file: Path | None = None) -> BuildSettings:
    load_env(env_file)
    # Fall back to the generic CI markers set by hosted runners.
    automated_default = _env_flag("CI")
    pr_default = (os.getenv("GITHUB_EVENT_NAME") or "") in {"pull_request", "pull_request_target"}
    return BuildSettings(
        is_automated_build=_env_flag("IsAutomatedBuild", default=automated_default),
        is_pull_request_build=_env_flag("IsPullRequestBuild", default=pr_default),
        is_release_build=_env_flag("IsReleaseBuild"),
        ci_build_name=_env_str("CiBuildName"),
        ci_build_index=_env_str("CiBuildIndex"),
        build_time=_env_str("BuildTime"),
        build_metadata=_env_str("BuildMeta"),
    )
