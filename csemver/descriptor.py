from __future__ import annotations

import logging
import xml.etree.ElementTree as xmllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from csemver.config import VersionConfig

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "BuildVersionData"
_KNOWN_KEYS = (
    "BuildMajor",
    "BuildMinor",
    "BuildPatch",
    "PreReleaseName",
    "PreReleaseNumber",
    "PreReleaseFix",
)
_REQUIRED_KEYS = ("BuildMajor", "BuildMinor", "BuildPatch")


@dataclass(frozen=True)
class BuildVersionData:
    build_major: int
    build_minor: int
    build_patch: int
    prerelease_name: str = ""
    prerelease_number: int = 0
    prerelease_fix: int = 0

    def to_config(
        self,
        *,
        build_metadata: str | None = None,
        ci_build_name: str | None = None,
        ci_build_index: str | None = None,
    ) -> VersionConfig:
        return VersionConfig(
            build_major=self.build_major,
            build_minor=self.build_minor,
            build_patch=self.build_patch,
            prerelease_name=self.prerelease_name,
            prerelease_number=self.prerelease_number,
            prerelease_fix=self.prerelease_fix,
            build_metadata=build_metadata,
            ci_build_name=ci_build_name,
            ci_build_index=ci_build_index,
        )


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _to_int(key: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer")
    if isinstance(raw, int):
        return raw
    s = str(raw).strip()
    if not s:
        return 0
    try:
        return int(s)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer (got {raw!r})") from e


def build_version_from_mapping(data: dict[str, Any]) -> BuildVersionData:
    for key in data:
        if key not in _KNOWN_KEYS:
            logger.warning("Unexpected attribute %s", key)

    missing = [k for k in _REQUIRED_KEYS if _is_blank(data.get(k))]
    if missing:
        raise ValueError("missing required attribute(s): " + ", ".join(missing))

    name = str(data.get("PreReleaseName") or "").strip()
    number = _to_int("PreReleaseNumber", data.get("PreReleaseNumber", 0))
    fix = _to_int("PreReleaseFix", data.get("PreReleaseFix", 0))
    if not name:
        if number or fix:
            logger.debug("PreReleaseName not provided; forcing PreReleaseNumber and PreReleaseFix to 0")
        number = fix = 0
    if number == 0 and fix != 0:
        logger.debug("PreReleaseNumber is 0; forcing PreReleaseFix to 0")
        fix = 0

    return BuildVersionData(
        build_major=_to_int("BuildMajor", data["BuildMajor"]),
        build_minor=_to_int("BuildMinor", data["BuildMinor"]),
        build_patch=_to_int("BuildPatch", data["BuildPatch"]),
        prerelease_name=name,
        prerelease_number=number,
        prerelease_fix=fix,
    )


def parse_build_version_xml(text: str) -> BuildVersionData:
    try:
        root = xmllib.fromstring(text)
    except xmllib.ParseError as e:
        raise ValueError(f"invalid build version XML: {e}") from e
    if root.tag != ROOT_ELEMENT:
        raise ValueError(f"XML element '{ROOT_ELEMENT}' not found")
    return build_version_from_mapping(dict(root.attrib))


def parse_build_version_yaml(text: str) -> BuildVersionData:
    data = yaml.safe_load(text)
    if isinstance(data, dict) and ROOT_ELEMENT in data and len(data) == 1:
        data = data[ROOT_ELEMENT]
    if not isinstance(data, dict):
        raise ValueError("build version descriptor must be a YAML mapping")
    return build_version_from_mapping({str(k): v for k, v in data.items()})


def load_build_version(path: Path) -> BuildVersionData:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yml", ".yaml"}:
        data = parse_build_version_yaml(text)
    else:
        data = parse_build_version_xml(text)
    logger.debug("loaded %s: %s", path, data)
    return data
