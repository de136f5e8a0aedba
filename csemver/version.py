from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from csemver.errors import PairingError, PatternError, RangeError, check_range
from csemver.formatting import format_version
from csemver.ordering import (
    MAX_MAJOR,
    MAX_MINOR,
    MAX_PATCH,
    FileVersionQuad,
    compute_ordered_version,
    derive_file_version,
    split_ordered_version,
)
from csemver.prerelease import PreReleaseVersion

logger = logging.getLogger(__name__)

CI_BUILD_ID_RE = re.compile(r"[0-9A-Za-z-]+")
MAX_BUILD_METADATA_LENGTH = 20


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class CSemVer:
    """A constrained semantic version.

    Immutable once built: every check runs in ``__post_init__`` before the
    ordered version and file version are derived, so an invalid instance is
    never observable.

    Ordering compares the packed file version. Build metadata takes no part
    in equality or ordering. Two CI builds of the same version with different
    CI names or indexes order equal but compare unequal.
    """

    major: int
    minor: int
    patch: int
    prerelease: PreReleaseVersion | None = None
    build_metadata: str = field(default="", compare=False)
    ci_build_name: str | None = None
    ci_build_index: str | None = None

    ordered_version: int = field(init=False, compare=False)
    file_version: FileVersionQuad = field(init=False, compare=False)

    def __post_init__(self) -> None:
        check_range("major", self.major, low=0, high=MAX_MAJOR)
        check_range("minor", self.minor, low=0, high=MAX_MINOR)
        check_range("patch", self.patch, low=0, high=MAX_PATCH)

        if self.prerelease is not None and not self.prerelease.is_prerelease:
            object.__setattr__(self, "prerelease", None)

        metadata = (self.build_metadata or "").strip()
        if len(metadata) > MAX_BUILD_METADATA_LENGTH:
            raise RangeError(
                "build metadata length", len(metadata), low=0, high=MAX_BUILD_METADATA_LENGTH
            )
        object.__setattr__(self, "build_metadata", metadata)

        ci_name = _blank_to_none(self.ci_build_name)
        ci_index = _blank_to_none(self.ci_build_index)
        if (ci_name is None) != (ci_index is None):
            raise PairingError(
                "ci_build_name and ci_build_index must both be set or both be absent"
            )
        if ci_index is not None and not CI_BUILD_ID_RE.fullmatch(ci_index):
            raise PatternError("ci_build_index", ci_index)
        if ci_name is not None and not CI_BUILD_ID_RE.fullmatch(ci_name):
            raise PatternError("ci_build_name", ci_name)
        object.__setattr__(self, "ci_build_name", ci_name)
        object.__setattr__(self, "ci_build_index", ci_index)

        ordered = compute_ordered_version(self.major, self.minor, self.patch, self.prerelease)
        object.__setattr__(self, "ordered_version", ordered)
        object.__setattr__(
            self, "file_version", derive_file_version(ordered, is_ci_build=self.is_ci_build)
        )
        logger.debug(
            "version %d.%d.%d prerelease=%s ci=%s ordered=%d file=%s",
            self.major,
            self.minor,
            self.patch,
            self.prerelease,
            self.is_ci_build,
            ordered,
            self.file_version,
        )

    @classmethod
    def from_ordered_version(
        cls,
        ordered: int,
        *,
        build_metadata: str = "",
        ci_build_name: str | None = None,
        ci_build_index: str | None = None,
    ) -> "CSemVer":
        major, minor, patch, prerelease = split_ordered_version(ordered)
        return cls(
            major=major,
            minor=minor,
            patch=patch,
            prerelease=prerelease,
            build_metadata=build_metadata,
            ci_build_name=ci_build_name,
            ci_build_index=ci_build_index,
        )

    @classmethod
    def from_file_version(
        cls,
        quad: FileVersionQuad,
        *,
        build_metadata: str = "",
        ci_build_name: str | None = None,
        ci_build_index: str | None = None,
    ) -> "CSemVer":
        name = _blank_to_none(ci_build_name)
        index = _blank_to_none(ci_build_index)
        if quad.is_ci_build and (name is None or index is None):
            raise PairingError(
                f"file version {quad} is a CI build; ci_build_name and ci_build_index are required"
            )
        if not quad.is_ci_build and (name is not None or index is not None):
            raise PairingError(f"file version {quad} is not a CI build; CI fields are not allowed")
        return cls.from_ordered_version(
            quad.to_ordered_version(),
            build_metadata=build_metadata,
            ci_build_name=ci_build_name,
            ci_build_index=ci_build_index,
        )

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def is_ci_build(self) -> bool:
        return self.ci_build_name is not None and self.ci_build_index is not None

    @property
    def is_zero(self) -> bool:
        return self.major == 0 and self.minor == 0 and self.patch == 0

    def render(self, *, include_metadata: bool = True, short_form: bool = False) -> str:
        return format_version(self, include_metadata=include_metadata, short_form=short_form)

    def __str__(self) -> str:
        return self.render()

    def _precedence(self) -> int:
        return self.file_version.to_int()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CSemVer):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, CSemVer):
            return NotImplemented
        return self._precedence() <= other._precedence()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, CSemVer):
            return NotImplemented
        return self._precedence() > other._precedence()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, CSemVer):
            return NotImplemented
        return self._precedence() >= other._precedence()
