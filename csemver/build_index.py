from __future__ import annotations

from datetime import datetime, timezone

COMMON_BASE_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)


def parse_build_time(text: str) -> datetime:
    raw = text.strip()
    if not raw:
        raise ValueError("build time must be a non-empty ISO-8601 timestamp")
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise ValueError(f"invalid build time {text!r}: {e}") from e


def build_index_from_time(ts: datetime) -> str:
    """Monotonic CI build index for a timestamp.

    Upper 16 bits: whole days since 2000-01-01 UTC. Lower 16 bits: seconds since
    that day's UTC midnight, halved. Naive timestamps are taken as local time.
    """
    utc = ts.astimezone(timezone.utc)
    midnight = utc.replace(hour=0, minute=0, second=0, microsecond=0)
    days = (utc - COMMON_BASE_DATE).days
    half_seconds = int((utc - midnight).total_seconds() / 2) & 0xFFFF
    return str(((days << 16) + half_seconds) & 0xFFFF_FFFF)
