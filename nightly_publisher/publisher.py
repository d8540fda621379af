"""Decide whether to publish a nightly asset, upload it and prune old ones."""

from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional, Sequence

from .config import NameTemplate, PublishConfig
from .models import Classification, PublishResult, ReleaseAsset
from .releases import GitHubReleases
from .utils import date_stamp

logger = logging.getLogger("nightly_publisher")


def classify(
    assets: Sequence[ReleaseAsset],
    template: NameTemplate,
    short_hash: str,
    max_releases: Optional[int],
) -> Classification:
    """Scan assets oldest-first for a duplicate and for overflow to delete.

    ``assets`` must already be sorted by creation time, oldest first. An
    asset built from ``short_hash`` stops the scan and reports a duplicate.
    The upload that follows counts toward ``max_releases``, so only the
    newest ``max_releases - 1`` previous matches survive; the rest are
    queued in the order they were visited. ``None`` keeps everything.
    """
    previous: List[ReleaseAsset] = []
    for asset in assets:
        if not template.matches(asset.name):
            continue
        if template.is_commit(asset.name, short_hash):
            logger.debug("Found %s for commit %s", asset.name, short_hash)
            return Classification(duplicate=True)
        previous.append(asset)

    if max_releases is None:
        return Classification(duplicate=False)

    overflow = max(0, len(previous) - (max_releases - 1))
    to_delete: List[int] = []
    for asset in previous[:overflow]:
        logger.info("Queuing old asset %s for deletion", asset.name)
        to_delete.append(asset.id)
    return Classification(duplicate=False, to_delete=to_delete)


def generate_asset_name(
    template: NameTemplate,
    moment: dt.date | dt.datetime,
    short_hash: str,
) -> str:
    """Render ``<prefix><YYYYMMDD>-<hash><suffix>`` using the UTC date of ``moment``."""
    return template.render(f"{date_stamp(moment)}-{short_hash}")


def publish(
    config: PublishConfig,
    client: GitHubReleases,
    moment: Optional[dt.date | dt.datetime] = None,
    dry_run: bool = False,
) -> PublishResult:
    """Run the full list / classify / upload / prune cycle for one release."""
    logger.info("Checking previous assets")
    assets = sorted(client.list_assets(config.release_id), key=lambda a: a.created_at)

    result = classify(
        assets, config.name_template, config.short_hash, config.max_releases
    )
    if result.duplicate:
        logger.info("Current commit already released, exiting")
        return PublishResult(uploaded=False)

    if moment is None:
        moment = dt.datetime.now(dt.timezone.utc)
    name = generate_asset_name(config.name_template, moment, config.short_hash)

    if dry_run:
        logger.info(
            "Dry run: would upload %s and delete %d old assets",
            name,
            len(result.to_delete),
        )
        return PublishResult(uploaded=False, asset_name=name)

    data = config.asset_path.read_bytes()
    logger.info("Uploading %s (%d bytes) as %s", config.asset_path, len(data), name)
    url = client.upload_asset(config.upload_url, name, data, config.content_type)

    logger.info("Deleting %d old assets", len(result.to_delete))
    deleted: List[int] = []
    for asset_id in result.to_delete:
        client.delete_asset(asset_id)
        deleted.append(asset_id)

    return PublishResult(uploaded=True, url=url, asset_name=name, deleted=deleted)
