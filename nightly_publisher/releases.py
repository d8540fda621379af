"""Minimal GitHub release client covering the calls the publisher makes."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

import requests

from .config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from .models import ReleaseAPIError, ReleaseAsset

logger = logging.getLogger("nightly_publisher")

PAGE_SIZE = 100
_URI_TEMPLATE_PATTERN = re.compile(r"\{[^}]*\}$")


def _error_detail(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text.strip()


class GitHubReleases:
    """Thin wrapper around the release asset endpoints."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            }
        )

    @property
    def repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}"

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise ReleaseAPIError(f"{method} {url} failed: {exc}") from exc
        if not resp.ok:
            raise ReleaseAPIError(
                f"{method} {url} returned {resp.status_code}: {_error_detail(resp)}"
            )
        return resp

    def list_assets(self, release_id: int) -> List[ReleaseAsset]:
        """Return every asset on the release, following pagination."""
        url = f"{self.repo_url}/releases/{release_id}/assets"
        assets: List[ReleaseAsset] = []
        page = 1
        while True:
            resp = self._request(
                "GET", url, params={"per_page": PAGE_SIZE, "page": page}
            )
            batch = resp.json()
            assets.extend(ReleaseAsset.from_api(item) for item in batch)
            logger.debug("Fetched %d assets from page %d", len(batch), page)
            if len(batch) < PAGE_SIZE:
                return assets
            page += 1

    def upload_asset(
        self,
        upload_url: str,
        name: str,
        data: bytes,
        content_type: str,
    ) -> str:
        """Upload ``data`` as a release asset and return its download URL."""
        url = _URI_TEMPLATE_PATTERN.sub("", upload_url)
        headers = {
            "Content-Type": content_type,
            "Content-Length": str(len(data)),
        }
        resp = self._request(
            "POST", url, params={"name": name}, headers=headers, data=data
        )
        payload = resp.json()
        download_url = payload.get("browser_download_url")
        if not download_url:
            raise ReleaseAPIError(f"Upload response for {name} has no download URL")
        return download_url

    def delete_asset(self, asset_id: int) -> None:
        self._request("DELETE", f"{self.repo_url}/releases/assets/{asset_id}")
