"""Timestamp helpers."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Current UTC time as a naive datetime.

    SQLite drops tzinfo on round-trip, so every stored timestamp is naive UTC
    and comparisons between fresh and reloaded values stay valid.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
