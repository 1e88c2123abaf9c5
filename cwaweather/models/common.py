"""Common helpers shared across models."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    """UTC timestamp with millisecond precision and a Z suffix, e.g. 2026-10-18T04:05:06.789Z."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
