"""Utility helpers for date stamps, commit hashes and API timestamps."""

from __future__ import annotations

import datetime as dt
from typing import Optional

SHORT_HASH_LENGTH = 6


def short_hash(commit_sha: str, length: int = SHORT_HASH_LENGTH) -> str:
    """Abbreviate a commit SHA the way asset names carry it."""
    return commit_sha[:length]


def date_stamp(moment: Optional[dt.datetime | dt.date] = None) -> str:
    """Return the UTC ``YYYYMMDD`` stamp for ``moment`` (defaults to now)."""
    if moment is None:
        moment = dt.datetime.now(dt.timezone.utc)
    elif isinstance(moment, dt.datetime) and moment.tzinfo is not None:
        moment = moment.astimezone(dt.timezone.utc)
    return f"{moment.year:04d}{moment.month:02d}{moment.day:02d}"


def parse_timestamp(value: str) -> dt.datetime:
    """Parse an ISO-8601 API timestamp into an aware UTC datetime."""
    parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc)
