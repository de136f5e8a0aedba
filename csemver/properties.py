from __future__ import annotations

import json
import xml.etree.ElementTree as xmllib
from pathlib import Path
from typing import Literal

from csemver.version import CSemVer

PropertiesFormat = Literal["json", "env", "props"]
FORMATS: tuple[str, ...] = ("json", "env", "props")


def version_properties(version: CSemVer, *, build_time: str | None = None) -> dict[str, str]:
    """Flatten a version into the build properties consumed by packaging tools."""
    pre = version.prerelease
    long_form = version.render()
    quad = version.file_version
    return {
        "BuildMajor": str(version.major),
        "BuildMinor": str(version.minor),
        "BuildPatch": str(version.patch),
        "PreReleaseName": pre.name if pre else "",
        "PreReleaseNumber": str(pre.number) if pre else "",
        "PreReleaseFix": str(pre.fix) if pre else "",
        "CiBuildName": version.ci_build_name or "",
        "CiBuildIndex": version.ci_build_index or "",
        "BuildMeta": version.build_metadata,
        "BuildTime": build_time or "",
        "FullBuildNumber": long_form,
        "ProductVersion": long_form,
        "InformationalVersion": long_form,
        "PackageVersion": version.render(include_metadata=False, short_form=True),
        "FileVersionMajor": str(quad.major),
        "FileVersionMinor": str(quad.minor),
        "FileVersionBuild": str(quad.build),
        "FileVersionRevision": str(quad.revision),
        "FileVersion": str(quad),
        "AssemblyVersion": str(quad),
        "OrderedVersion": str(version.ordered_version),
    }


def render_json(props: dict[str, str]) -> str:
    return json.dumps(props, indent=2, sort_keys=True) + "\n"


def render_env(props: dict[str, str]) -> str:
    return "".join(f"{k}={v}\n" for k, v in props.items())


def render_props(props: dict[str, str]) -> str:
    project = xmllib.Element("Project")
    group = xmllib.SubElement(project, "PropertyGroup")
    for k, v in props.items():
        xmllib.SubElement(group, k).text = v
    xmllib.indent(project, space="  ")
    return xmllib.tostring(project, encoding="unicode") + "\n"


def render_properties(props: dict[str, str], fmt: PropertiesFormat = "json") -> str:
    if fmt == "json":
        return render_json(props)
    if fmt == "env":
        return render_env(props)
    if fmt == "props":
        return render_props(props)
    raise ValueError(f"unsupported properties format: {fmt}")


def write_properties(path: Path, props: dict[str, str], fmt: PropertiesFormat = "json") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_properties(props, fmt), encoding="utf-8")
