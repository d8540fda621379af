from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

from helpers import COMMIT_SHA
from nightly_publisher.config import NameTemplate, PublishConfig


@pytest.fixture
def artifact(tmp_path: Path) -> Path:
    path = tmp_path / "build.zip"
    path.write_bytes(b"PK\x03\x04 nightly build")
    return path


@pytest.fixture
def make_config(artifact: Path):
    def factory(max_releases: Optional[int] = 1, template: str = "build-$$.zip") -> PublishConfig:
        return PublishConfig(
            release_id=42,
            asset_path=artifact,
            content_type="application/zip",
            upload_url="https://uploads.github.com/repos/octo/nightly/releases/42/assets{?name,label}",
            name_template=NameTemplate.parse(template),
            commit_sha=COMMIT_SHA,
            owner="octo",
            repo="nightly",
            token="secret",
            max_releases=max_releases,
        )

    return factory
