from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from csemver.build_index import build_index_from_time, parse_build_time
from csemver.build_kind import classify_build_kind, resolve_ci_build
from csemver.config import BuildSettings, VersionConfig, load_env, load_settings
from csemver.descriptor import load_build_version
from csemver.logging_setup import setup_logging
from csemver.ordering import FileVersionQuad
from csemver.properties import FORMATS, version_properties, write_properties
from csemver.version import CSemVer


def _existing_path(value: str) -> Path:
    p = Path(value)
    if not p.exists():
        raise argparse.ArgumentTypeError(f"path not found: {value}")
    return p


def _add_version_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--descriptor", type=_existing_path, default=None, help="BuildVersion.xml or .yaml")
    p.add_argument("--major", type=int, default=None)
    p.add_argument("--minor", type=int, default=None)
    p.add_argument("--patch", type=int, default=None)
    p.add_argument("--prerelease", type=str, default=None, help="pre-release name (alpha..rc or a..r)")
    p.add_argument("--prerelease-number", type=int, default=None)
    p.add_argument("--prerelease-fix", type=int, default=None)
    p.add_argument("--build-meta", type=str, default=None, help="build metadata (max 20 chars)")
    p.add_argument("--ci-name", type=str, default=None)
    p.add_argument("--ci-index", type=str, default=None)
    p.add_argument("--no-ci", action="store_true", help="ignore CI build information")
    p.add_argument("--env-file", type=_existing_path, default=None)


def _version_fields(args: argparse.Namespace) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if args.descriptor is not None:
        data = load_build_version(Path(args.descriptor))
        fields = {
            "build_major": data.build_major,
            "build_minor": data.build_minor,
            "build_patch": data.build_patch,
            "prerelease_name": data.prerelease_name,
            "prerelease_number": data.prerelease_number,
            "prerelease_fix": data.prerelease_fix,
        }

    overrides = {
        "build_major": args.major,
        "build_minor": args.minor,
        "build_patch": args.patch,
        "prerelease_name": args.prerelease,
        "prerelease_number": args.prerelease_number,
        "prerelease_fix": args.prerelease_fix,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    missing = [k for k in ("build_major", "build_minor", "build_patch") if k not in fields]
    if missing:
        raise SystemExit(
            "missing " + ", ".join(missing) + " (provide --descriptor or --major/--minor/--patch)"
        )
    return fields


def _build_version(
    args: argparse.Namespace, *, settings: BuildSettings
) -> tuple[CSemVer, str | None]:
    try:
        fields = _version_fields(args)
        if args.no_ci:
            ci_name, ci_index = None, None
        elif args.ci_name or args.ci_index:
            ci_name, ci_index = args.ci_name, args.ci_index
        else:
            ci_name, ci_index = resolve_ci_build(settings)
        fields["ci_build_name"] = ci_name
        fields["ci_build_index"] = ci_index
        fields["build_metadata"] = args.build_meta or settings.build_metadata
        version = VersionConfig.model_validate(fields).to_version()
    except ValueError as e:
        raise SystemExit(str(e)) from e
    return version, settings.build_time


def _print_decoded(version: CSemVer) -> None:
    print(f"version:  {version.render()}")
    print(f"short:    {version.render(include_metadata=False, short_form=True)}")
    print(f"ordered:  {version.ordered_version}")
    print(f"file:     {version.file_version}")


def _config_validate(args: argparse.Namespace) -> int:
    issues: list[str] = []

    env_path = load_env(args.env_file)
    if env_path is not None:
        print(f"✓ .env file found: {env_path}")
    else:
        issues.append("⚠ no .env file found (using process environment only)")

    settings = load_settings(args.env_file)
    kind = classify_build_kind(settings)
    print(f"✓ Build kind: {kind.value}")
    try:
        ci_name, ci_index = resolve_ci_build(settings)
        if ci_name is None:
            print("✓ CI build information: none (release build)")
        else:
            print(f"✓ CI build information: name={ci_name} index={ci_index}")
    except ValueError as e:
        issues.append(f"✗ BuildTime invalid: {e}")

    if args.descriptor:
        descriptor_path = Path(args.descriptor)
        if not descriptor_path.exists():
            issues.append(f"✗ Descriptor file not found: {descriptor_path}")
        else:
            try:
                data = load_build_version(descriptor_path)
                version = data.to_config(build_metadata=settings.build_metadata).to_version()
                print(f"✓ Descriptor valid: {version.render()}")
                print(f"  - file version {version.file_version}")
            except ValueError as e:
                issues.append(f"✗ Descriptor invalid: {e}")

    print()
    if issues:
        print("Issues found:")
        for issue in issues:
            print(f"  {issue}")
    if any(i.startswith("✗") for i in issues):
        return 1
    print("Configuration OK.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="csemver")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-format", choices=["text", "json"], default="text")
    sub = parser.add_subparsers(dest="cmd", required=True)

    show_p = sub.add_parser("show", help="print the version for the current build")
    _add_version_args(show_p)
    fmt_g = show_p.add_mutually_exclusive_group()
    fmt_g.add_argument("--short", action="store_true", help="short form without metadata")
    fmt_g.add_argument("--no-metadata", action="store_true", help="long form without metadata")
    fmt_g.add_argument("--json", action="store_true", help="print all build properties as JSON")

    gen_p = sub.add_parser("generate", help="write build properties for the current build")
    _add_version_args(gen_p)
    gen_p.add_argument("--output", type=Path, required=True)
    gen_p.add_argument("--format", choices=list(FORMATS), default="json")

    dec_p = sub.add_parser("decode", help="decode an ordered version or file version")
    src_g = dec_p.add_mutually_exclusive_group(required=True)
    src_g.add_argument("--ordered", type=int, default=None)
    src_g.add_argument("--file-version", type=str, default=None, help="A.B.C.D")
    dec_p.add_argument("--ci-name", type=str, default=None)
    dec_p.add_argument("--ci-index", type=str, default=None)
    dec_p.add_argument("--build-meta", type=str, default="")

    idx_p = sub.add_parser("build-index", help="print the time-based CI build index")
    idx_p.add_argument("--time", type=str, default=None, help="ISO-8601 timestamp (default: now)")

    config_p = sub.add_parser("config", help="configuration utilities")
    config_sub = config_p.add_subparsers(dest="config_cmd", required=True)
    validate_p = config_sub.add_parser("validate", help="validate environment and descriptor")
    validate_p.add_argument("--descriptor", type=str, default=None)
    validate_p.add_argument("--env-file", type=_existing_path, default=None)

    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING", args.log_format)

    if args.cmd == "show":
        settings = load_settings(args.env_file)
        version, build_time = _build_version(args, settings=settings)
        if args.json:
            print(json.dumps(version_properties(version, build_time=build_time), indent=2))
        elif args.short:
            print(version.render(include_metadata=False, short_form=True))
        elif args.no_metadata:
            print(version.render(include_metadata=False))
        else:
            print(version.render())
        return 0

    if args.cmd == "generate":
        settings = load_settings(args.env_file)
        version, build_time = _build_version(args, settings=settings)
        if build_time is None:
            build_time = datetime.now(timezone.utc).isoformat()
        props = version_properties(version, build_time=build_time)
        write_properties(Path(args.output), props, args.format)
        print(f"Wrote {args.format} properties for {props['FullBuildNumber']} to {args.output}")
        return 0

    if args.cmd == "decode":
        try:
            if args.ordered is not None:
                version = CSemVer.from_ordered_version(
                    int(args.ordered),
                    build_metadata=args.build_meta,
                    ci_build_name=args.ci_name,
                    ci_build_index=args.ci_index,
                )
            else:
                version = CSemVer.from_file_version(
                    FileVersionQuad.parse(args.file_version),
                    build_metadata=args.build_meta,
                    ci_build_name=args.ci_name,
                    ci_build_index=args.ci_index,
                )
        except ValueError as e:
            raise SystemExit(str(e)) from e
        _print_decoded(version)
        return 0

    if args.cmd == "build-index":
        try:
            ts = parse_build_time(args.time) if args.time else datetime.now(timezone.utc)
        except ValueError as e:
            raise SystemExit(str(e)) from e
        print(build_index_from_time(ts))
        return 0

    if args.cmd == "config":
        if args.config_cmd == "validate":
            return _config_validate(args)
        raise AssertionError(f"unhandled config_cmd: {args.config_cmd}")

    raise AssertionError(f"unhandled cmd: {args.cmd}")


def cli() -> None:
    raise SystemExit(main())
