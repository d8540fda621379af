"""Command-line entry point for the nightly asset publisher."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .actions import set_failed, set_output
from .config import DEFAULT_TIMEOUT, load_config
from .publisher import publish
from .releases import GitHubReleases

logger = logging.getLogger("nightly_publisher.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Upload a nightly build to a release and prune older builds. "
            "Options default to the matching INPUT_* environment variables."
        ),
    )
    parser.add_argument(
        "--asset-path",
        type=Path,
        default=None,
        help="File to upload (INPUT_ASSET_PATH)",
    )
    parser.add_argument(
        "--asset-name",
        default=None,
        help="Asset name template containing '$$' once (INPUT_ASSET_NAME)",
    )
    parser.add_argument(
        "--content-type",
        default=None,
        help="Content type sent with the upload (INPUT_ASSET_CONTENT_TYPE)",
    )
    parser.add_argument(
        "--release-id",
        default=None,
        help="Numeric id of the release to publish to (INPUT_RELEASE_ID)",
    )
    parser.add_argument(
        "--upload-url",
        default=None,
        help="Release upload URL (INPUT_UPLOAD_URL)",
    )
    parser.add_argument(
        "--max-releases",
        default=None,
        help="Number of matching assets to keep, including the new one (INPUT_MAX_RELEASES)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be uploaded and deleted without changing the release",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace, env: Optional[Mapping[str, str]] = None) -> None:
    config = load_config(
        env,
        overrides={
            "asset_path": args.asset_path,
            "asset_name": args.asset_name,
            "asset_content_type": args.content_type,
            "release_id": args.release_id,
            "upload_url": args.upload_url,
            "max_releases": args.max_releases,
            "timeout": args.timeout,
        },
    )
    client = GitHubReleases(
        config.owner,
        config.repo,
        config.token,
        api_url=config.api_url,
        timeout=config.timeout,
    )
    overall_start = time.perf_counter()
    try:
        result = publish(config, client, dry_run=args.dry_run)
    finally:
        client.close()
    logger.debug("Publish finished in %.2fs", time.perf_counter() - overall_start)

    if not result.uploaded:
        set_output("uploaded", "no", env)
        return
    logger.info("Uploaded %s -> %s", result.asset_name, result.url)
    set_output("uploaded", "yes", env)
    set_output("url", result.url or "", env)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    try:
        run(args)
    except Exception as exc:  # pylint: disable=broad-except
        logger.debug("Publish failed", exc_info=True)
        set_failed(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
