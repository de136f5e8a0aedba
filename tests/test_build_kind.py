from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from csemver.build_index import build_index_from_time, parse_build_time
from csemver.build_kind import BuildKind, classify_build_kind, resolve_ci_build
from csemver.config import BuildSettings

LOCAL = BuildSettings(
    is_automated_build=False,
    is_pull_request_build=False,
    is_release_build=False,
    ci_build_name=None,
    ci_build_index=None,
    build_time=None,
    build_metadata=None,
)
NOW = datetime(2025, 6, 2, 17, 15, 48, tzinfo=timezone.utc)


def test_build_index_known_value() -> None:
    assert build_index_from_time(parse_build_time("2025-06-02T10:15:48-07:00")) == "608467298"
    assert build_index_from_time(NOW) == "608467298"


def test_build_index_base_date() -> None:
    base = datetime(2000, 1, 1, tzinfo=timezone.utc)
    assert build_index_from_time(base) == "0"
    assert build_index_from_time(base + timedelta(days=1, seconds=3)) == str((1 << 16) + 1)


def test_build_index_increases_with_time() -> None:
    earlier = int(build_index_from_time(NOW))
    later = int(build_index_from_time(NOW + timedelta(seconds=2)))
    next_day = int(build_index_from_time(NOW + timedelta(days=1)))
    assert earlier < later < next_day


def test_parse_build_time_accepts_zulu() -> None:
    assert parse_build_time("2025-06-02T17:15:48Z") == NOW


@pytest.mark.parametrize("text", ["", "   ", "yesterday"])
def test_parse_build_time_rejects_invalid(text: str) -> None:
    with pytest.raises(ValueError):
        parse_build_time(text)


@pytest.mark.parametrize(
    "automated,pr,release,kind",
    [
        (False, False, False, BuildKind.LOCAL),
        (False, True, True, BuildKind.LOCAL),
        (True, True, False, BuildKind.PULL_REQUEST),
        (True, True, True, BuildKind.PULL_REQUEST),
        (True, False, True, BuildKind.RELEASE),
        (True, False, False, BuildKind.CI),
    ],
)
def test_classify_build_kind(automated: bool, pr: bool, release: bool, kind: BuildKind) -> None:
    settings = replace(
        LOCAL, is_automated_build=automated, is_pull_request_build=pr, is_release_build=release
    )
    assert classify_build_kind(settings) == kind


@pytest.mark.parametrize(
    "automated,pr,name",
    [(False, False, "ZZZ"), (True, True, "PRQ"), (True, False, "BLD")],
)
def test_default_ci_build_names(automated: bool, pr: bool, name: str) -> None:
    settings = replace(LOCAL, is_automated_build=automated, is_pull_request_build=pr)
    assert resolve_ci_build(settings, now=NOW) == (name, "608467298")


def test_release_build_has_no_ci_information() -> None:
    settings = replace(
        LOCAL, is_automated_build=True, is_release_build=True, ci_build_name="BLD", ci_build_index="7"
    )
    assert resolve_ci_build(settings, now=NOW) == (None, None)


def test_explicit_ci_settings_win() -> None:
    settings = replace(LOCAL, ci_build_name="QRP", ci_build_index="123")
    assert resolve_ci_build(settings, now=NOW) == ("QRP", "123")


def test_build_time_setting_drives_index() -> None:
    settings = replace(LOCAL, build_time="2000-01-02T00:00:02Z")
    name, index = resolve_ci_build(settings, now=NOW)
    assert name == "ZZZ"
    assert index == str((1 << 16) + 1)


def test_invalid_build_time_setting_is_an_error() -> None:
    with pytest.raises(ValueError):
        resolve_ci_build(replace(LOCAL, build_time="not a time"), now=NOW)
