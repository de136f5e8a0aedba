"""Ordered-version packing and the legacy file-version quad.

The ordered version is a single integer that totally orders every valid
constrained version. Each weight leaves room for the largest value of every
field below it:

    MUL_NUM   = 100
    MUL_NAME  = MUL_NUM * 100           # 10_000
    MUL_PATCH = MUL_NAME * 8 + 1        # 80_001
    MUL_MINOR = MUL_PATCH * 10_000      # 800_010_000
    MUL_MAJOR = MUL_MINOR * 50_000      # 40_000_500_000_000

A release of patch P occupies the top of a MUL_PATCH sized block; every
pre-release of P lands in the MUL_PATCH - 1 slots below it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from csemver.errors import FileVersionOverflowError, RangeError, check_range
from csemver.prerelease import PreReleaseVersion

logger = logging.getLogger(__name__)

MAX_MAJOR = 99_999
MAX_MINOR = 49_999
MAX_PATCH = 9_999

MUL_NUM = 100
MUL_NAME = MUL_NUM * 100
MUL_PATCH = (MUL_NAME * 8) + 1
MUL_MINOR = MUL_PATCH * 10_000
MUL_MAJOR = MUL_MINOR * 50_000

MAX_ORDERED_VERSION = (MAX_MAJOR * MUL_MAJOR) + (MAX_MINOR * MUL_MINOR) + ((MAX_PATCH + 1) * MUL_PATCH)

UINT16_MAX = 0xFFFF
UINT64_MAX = 0xFFFF_FFFF_FFFF_FFFF


def compute_ordered_version(
    major: int, minor: int, patch: int, prerelease: PreReleaseVersion | None = None
) -> int:
    value = (major * MUL_MAJOR) + (minor * MUL_MINOR) + ((patch + 1) * MUL_PATCH)
    if prerelease is not None and prerelease.is_prerelease:
        value -= MUL_PATCH - 1
        value += (prerelease.index * MUL_NAME) + (prerelease.number * MUL_NUM) + prerelease.fix
    return value


def split_ordered_version(ordered: int) -> tuple[int, int, int, PreReleaseVersion | None]:
    """Reverse compute_ordered_version into (major, minor, patch, prerelease)."""
    check_range("ordered version", ordered, low=1, high=MAX_ORDERED_VERSION)

    acc = ordered
    pre_part = acc % MUL_PATCH
    prerelease: PreReleaseVersion | None = None
    if pre_part != 0:
        pre_part -= 1
        index, pre_part = divmod(pre_part, MUL_NAME)
        number, fix = divmod(pre_part, MUL_NUM)
        prerelease = PreReleaseVersion(index=index, number=number, fix=fix)
    else:
        acc -= MUL_PATCH

    major, acc = divmod(acc, MUL_MAJOR)
    minor, acc = divmod(acc, MUL_MINOR)
    patch = acc // MUL_PATCH
    return major, minor, patch, prerelease


@dataclass(frozen=True, order=True)
class FileVersionQuad:
    """Four 16-bit fields packed most-significant first into 64 bits.

    The low bit of ``revision`` marks a CI build; the remaining 63 bits hold the
    ordered version.
    """

    major: int
    minor: int
    build: int
    revision: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "build", "revision"):
            check_range(f"file version {name}", getattr(self, name), low=0, high=UINT16_MAX)

    @classmethod
    def from_int(cls, value: int) -> "FileVersionQuad":
        if value < 0 or value > UINT64_MAX:
            raise FileVersionOverflowError(f"file version value does not fit in 64 bits: {value}")
        revision, rest = value % 65536, value // 65536
        build, rest = rest % 65536, rest // 65536
        minor, rest = rest % 65536, rest // 65536
        major = rest % 65536
        return cls(major=major, minor=minor, build=build, revision=revision)

    @classmethod
    def from_ordered_version(cls, ordered: int, *, is_ci_build: bool = False) -> "FileVersionQuad":
        return derive_file_version(ordered, is_ci_build=is_ci_build)

    @classmethod
    def parse(cls, text: str) -> "FileVersionQuad":
        parts = text.strip().split(".")
        if len(parts) != 4 or not all(p.isdigit() for p in parts):
            raise ValueError(f"file version must look like A.B.C.D: {text!r}")
        major, minor, build, revision = (int(p) for p in parts)
        return cls(major=major, minor=minor, build=build, revision=revision)

    def to_int(self) -> int:
        return (self.major << 48) + (self.minor << 32) + (self.build << 16) + self.revision

    @property
    def is_ci_build(self) -> bool:
        return (self.revision & 1) == 1

    def to_ordered_version(self) -> int:
        return self.to_int() >> 1

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.build}.{self.revision}"


def derive_file_version(ordered: int, *, is_ci_build: bool = False) -> FileVersionQuad:
    if ordered < 0:
        raise RangeError("ordered version", ordered, low=0, high=MAX_ORDERED_VERSION)
    value = (ordered << 1) + (1 if is_ci_build else 0)
    if value > UINT64_MAX:
        raise FileVersionOverflowError(
            f"ordered version {ordered} does not fit in a 64-bit file version"
        )
    quad = FileVersionQuad.from_int(value)
    logger.debug("file version for ordered=%d ci=%s: %s", ordered, is_ci_build, quad)
    return quad
