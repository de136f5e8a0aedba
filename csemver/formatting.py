from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from csemver.version import CSemVer


def ci_suffix(*, ci_build_index: str | None, ci_build_name: str | None, after_prerelease: bool) -> str:
    if not (ci_build_index and ci_build_name):
        return ""
    delimiter = "." if after_prerelease else "--"
    return f"{delimiter}ci.{ci_build_index}.{ci_build_name}"


def format_version(
    version: CSemVer, *, include_metadata: bool = True, short_form: bool = False
) -> str:
    """Render the canonical string form of a constrained version.

    The default (long form with metadata) is the product/informational version.
    ``include_metadata=False, short_form=True`` gives the package-manager safe
    short identifier.
    """
    out = f"{version.major}.{version.minor}.{version.patch}"

    pre = version.prerelease.render(short_form=short_form) if version.prerelease else ""
    out += pre
    out += ci_suffix(
        ci_build_index=version.ci_build_index,
        ci_build_name=version.ci_build_name,
        after_prerelease=bool(pre),
    )

    if include_metadata and version.build_metadata.strip():
        out += f"+{version.build_metadata}"
    return out
