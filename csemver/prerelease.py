from __future__ import annotations

import logging
from dataclasses import dataclass

from csemver.errors import UnknownPreReleaseError, check_range

logger = logging.getLogger(__name__)

PRERELEASE_NAMES: tuple[str, ...] = (
    "alpha",
    "beta",
    "delta",
    "epsilon",
    "gamma",
    "kappa",
    "prerelease",
    "rc",
)
PRERELEASE_SHORT_NAMES: tuple[str, ...] = ("a", "b", "d", "e", "g", "k", "p", "r")

NO_PRERELEASE = -1
MAX_PRERELEASE_INDEX = len(PRERELEASE_NAMES) - 1
MAX_NUMBER = 99
MAX_FIX = 99


def _find(values: tuple[str, ...], name: str) -> int:
    folded = name.casefold()
    for i, v in enumerate(values):
        if v == folded:
            return i
    return NO_PRERELEASE


def resolve_index(name: str | None) -> int:
    """Map a pre-release name to its position in the canonical ordering.

    Long names are tried before short names, case-insensitively. Returns -1
    for a blank or unrecognised name.
    """
    if name is None or not name.strip():
        return NO_PRERELEASE
    name = name.strip()
    index = _find(PRERELEASE_NAMES, name)
    return index if index >= 0 else _find(PRERELEASE_SHORT_NAMES, name)


@dataclass(frozen=True)
class PreReleaseVersion:
    """Pre-release designator of a constrained version.

    ``index`` is the position in PRERELEASE_NAMES, or -1 for "no pre-release"
    (number and fix are then forced to 0).
    """

    index: int
    number: int = 0
    fix: int = 0

    def __post_init__(self) -> None:
        check_range("prerelease index", self.index, low=NO_PRERELEASE, high=MAX_PRERELEASE_INDEX)
        if self.index == NO_PRERELEASE:
            object.__setattr__(self, "number", 0)
            object.__setattr__(self, "fix", 0)
            return
        check_range("prerelease number", self.number, low=0, high=MAX_NUMBER)
        check_range("prerelease fix", self.fix, low=0, high=MAX_FIX)

    @classmethod
    def from_name(cls, name: str | None, number: int = 0, fix: int = 0) -> "PreReleaseVersion":
        if name is None or not name.strip():
            return cls(index=NO_PRERELEASE)
        index = resolve_index(name)
        if index == NO_PRERELEASE:
            raise UnknownPreReleaseError(name)
        logger.debug("prerelease %r resolved to index %d", name, index)
        return cls(index=index, number=number, fix=fix)

    @property
    def is_prerelease(self) -> bool:
        return self.index >= 0

    @property
    def name(self) -> str:
        return PRERELEASE_NAMES[self.index] if self.is_prerelease else ""

    @property
    def short_name(self) -> str:
        return PRERELEASE_SHORT_NAMES[self.index] if self.is_prerelease else ""

    def render(self, *, short_form: bool = False) -> str:
        # fix is only ever rendered as a continuation of a rendered number
        if not self.is_prerelease:
            return ""
        if short_form:
            out = f"-{self.short_name}"
            if self.number > 0:
                out += f"-{self.number:02d}"
                if self.fix > 0:
                    out += f"-{self.fix:02d}"
            return out

        out = f"-{self.name}"
        if self.number > 0:
            out += f".{self.number}"
            if self.fix > 0:
                out += f".{self.fix}"
        return out

    def __str__(self) -> str:
        return self.render()
