from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum

from csemver.build_index import build_index_from_time, parse_build_time
from csemver.config import BuildSettings

logger = logging.getLogger(__name__)


class BuildKind(str, Enum):
    LOCAL = "LocalBuild"
    PULL_REQUEST = "PullRequestBuild"
    CI = "CiBuild"
    RELEASE = "ReleaseBuild"


DEFAULT_CI_BUILD_NAMES: dict[BuildKind, str] = {
    BuildKind.LOCAL: "ZZZ",
    BuildKind.PULL_REQUEST: "PRQ",
    BuildKind.CI: "BLD",
}


def classify_build_kind(settings: BuildSettings) -> BuildKind:
    if not settings.is_automated_build:
        return BuildKind.LOCAL
    if settings.is_pull_request_build:
        return BuildKind.PULL_REQUEST
    if settings.is_release_build:
        return BuildKind.RELEASE
    return BuildKind.CI


def resolve_ci_build(
    settings: BuildSettings, *, now: datetime | None = None
) -> tuple[str | None, str | None]:
    """Return (ci_build_name, ci_build_index) for the current build.

    Release builds carry no CI information. Otherwise explicit settings win,
    falling back to the per-kind default name and a time-based index.
    """
    kind = classify_build_kind(settings)
    if kind == BuildKind.RELEASE:
        logger.debug("release build: no CI build information")
        return None, None

    name = settings.ci_build_name or DEFAULT_CI_BUILD_NAMES[kind]
    index = settings.ci_build_index
    if index is None:
        ts = parse_build_time(settings.build_time) if settings.build_time else None
        index = build_index_from_time(ts or now or datetime.now(timezone.utc))
    logger.debug("build kind %s: ci_build_name=%s ci_build_index=%s", kind.value, name, index)
    return name, index
