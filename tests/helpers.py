from __future__ import annotations

import datetime as dt
from typing import List, Optional

from nightly_publisher.models import ReleaseAsset

COMMIT_SHA = "1234567890abcdef1234567890abcdef12345678"


def make_asset(asset_id: int, name: str, day: int) -> ReleaseAsset:
    return ReleaseAsset(
        id=asset_id,
        name=name,
        created_at=dt.datetime(2024, 1, day, tzinfo=dt.timezone.utc),
    )


class FakeReleases:
    """In-memory stand-in recording every call the publisher makes."""

    def __init__(self, assets: Optional[List[ReleaseAsset]] = None) -> None:
        self.assets = list(assets or [])
        self.calls: List[tuple] = []

    def list_assets(self, release_id: int) -> List[ReleaseAsset]:
        self.calls.append(("list", release_id))
        return list(self.assets)

    def upload_asset(self, upload_url: str, name: str, data: bytes, content_type: str) -> str:
        self.calls.append(("upload", upload_url, name, data, content_type))
        return f"https://github.com/octo/nightly/releases/download/nightly/{name}"

    def delete_asset(self, asset_id: int) -> None:
        self.calls.append(("delete", asset_id))

    def calls_of(self, kind: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == kind]
