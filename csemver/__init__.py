from __future__ import annotations

from csemver.build_index import build_index_from_time, parse_build_time
from csemver.build_kind import BuildKind, classify_build_kind, resolve_ci_build
from csemver.config import BuildSettings, VersionConfig, load_settings
from csemver.descriptor import BuildVersionData, load_build_version
from csemver.errors import (
    CSemVerError,
    FileVersionOverflowError,
    PairingError,
    PatternError,
    RangeError,
    UnknownPreReleaseError,
)
from csemver.formatting import format_version
from csemver.ordering import (
    MAX_ORDERED_VERSION,
    FileVersionQuad,
    compute_ordered_version,
    derive_file_version,
    split_ordered_version,
)
from csemver.prerelease import PreReleaseVersion, resolve_index
from csemver.properties import version_properties, write_properties
from csemver.version import CSemVer

__all__ = [
    "__version__",
    # Core
    "CSemVer",
    "PreReleaseVersion",
    "FileVersionQuad",
    "resolve_index",
    "compute_ordered_version",
    "split_ordered_version",
    "derive_file_version",
    "format_version",
    "MAX_ORDERED_VERSION",
    # Errors
    "CSemVerError",
    "RangeError",
    "PatternError",
    "PairingError",
    "FileVersionOverflowError",
    "UnknownPreReleaseError",
    # Configuration
    "VersionConfig",
    "BuildSettings",
    "load_settings",
    # Build kind
    "BuildKind",
    "classify_build_kind",
    "resolve_ci_build",
    "build_index_from_time",
    "parse_build_time",
    # Descriptor
    "BuildVersionData",
    "load_build_version",
    # Properties
    "version_properties",
    "write_properties",
]

__version__ = "0.1.0"
