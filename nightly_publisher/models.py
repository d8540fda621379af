"""Data models shared by the release client and the publisher."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from .utils import parse_timestamp


class ReleaseAPIError(RuntimeError):
    """Raised when a release API request fails or returns something unexpected."""


@dataclass(frozen=True)
class ReleaseAsset:
    """Asset attached to a release, as reported by the API."""

    id: int
    name: str
    created_at: dt.datetime

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "ReleaseAsset":
        try:
            return cls(
                id=int(payload["id"]),
                name=str(payload["name"]),
                created_at=parse_timestamp(payload["created_at"]),
            )
        except KeyError as exc:
            raise ReleaseAPIError(
                f"Unexpected asset payload: missing {exc.args[0]}"
            ) from exc


@dataclass
class Classification:
    """Outcome of scanning existing assets against the name template."""

    duplicate: bool
    to_delete: List[int] = field(default_factory=list)


@dataclass
class PublishResult:
    """What a publish run did."""

    uploaded: bool
    url: Optional[str] = None
    asset_name: Optional[str] = None
    deleted: List[int] = field(default_factory=list)
