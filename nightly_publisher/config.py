"""Configuration objects and constants for the publisher."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .actions import get_input
from .utils import short_hash

PLACEHOLDER = "$$"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


class ConfigError(ValueError):
    """Raised when a required input is missing or malformed."""


@dataclass(frozen=True)
class NameTemplate:
    """Asset name split around its single placeholder."""

    prefix: str
    suffix: str

    @classmethod
    def parse(cls, raw: str) -> "NameTemplate":
        count = raw.count(PLACEHOLDER)
        if count != 1:
            raise ConfigError(
                f"asset_name must contain the placeholder {PLACEHOLDER!r} exactly once "
                f"(found {count} in {raw!r})"
            )
        prefix, suffix = raw.split(PLACEHOLDER)
        return cls(prefix=prefix, suffix=suffix)

    def matches(self, name: str) -> bool:
        return name.startswith(self.prefix) and name.endswith(self.suffix)

    def is_commit(self, name: str, short_hash: str) -> bool:
        """True when ``name`` was published from the commit ``short_hash``."""
        return name.endswith(f"-{short_hash}{self.suffix}")

    def render(self, stamp: str) -> str:
        return f"{self.prefix}{stamp}{self.suffix}"


@dataclass(frozen=True)
class PublishConfig:
    """Settings for a single publish run."""

    release_id: int
    asset_path: Path
    content_type: str
    upload_url: str
    name_template: NameTemplate
    commit_sha: str
    owner: str
    repo: str
    token: str
    max_releases: Optional[int] = None
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def short_hash(self) -> str:
        return short_hash(self.commit_sha)


def _require(value: Optional[str], name: str) -> str:
    if not value:
        raise ConfigError(f"Input required and not supplied: {name}")
    return value


def _require_env(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigError(f"Environment variable {name} is not set")
    return value


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _split_repository(value: str) -> tuple[str, str]:
    owner, sep, repo = value.partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigError(f"GITHUB_REPOSITORY must look like 'owner/repo', got {value!r}")
    return owner, repo


def load_config(
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, object]] = None,
) -> PublishConfig:
    """Build a :class:`PublishConfig` from workflow inputs and environment.

    ``overrides`` holds values supplied on the command line; entries set to
    ``None`` fall back to the matching ``INPUT_*`` variable.
    """
    env = os.environ if env is None else env
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

    def pick(name: str) -> str:
        if name in overrides:
            return str(overrides[name]).strip()
        return get_input(name, env)

    upload_url = _require(pick("upload_url"), "upload_url")
    asset_path = _require(pick("asset_path"), "asset_path")
    content_type = _require(pick("asset_content_type"), "asset_content_type")
    release_id = _parse_int(_require(pick("release_id"), "release_id"), "release_id")
    template = NameTemplate.parse(_require(pick("asset_name"), "asset_name"))

    max_releases: Optional[int] = None
    raw_max = pick("max_releases")
    if raw_max:
        max_releases = _parse_int(raw_max, "max_releases")
        if max_releases < 1:
            raise ConfigError(f"max_releases must be at least 1, got {max_releases}")

    commit_sha = _require_env(env, "GITHUB_SHA")
    owner, repo = _split_repository(_require_env(env, "GITHUB_REPOSITORY"))
    token = _require_env(env, "GITHUB_TOKEN")
    api_url = env.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL
    timeout = float(overrides.get("timeout", DEFAULT_TIMEOUT))

    return PublishConfig(
        release_id=release_id,
        asset_path=Path(asset_path).expanduser(),
        content_type=content_type,
        upload_url=upload_url,
        name_template=template,
        commit_sha=commit_sha,
        owner=owner,
        repo=repo,
        token=token,
        max_releases=max_releases,
        api_url=api_url.rstrip("/"),
        timeout=timeout,
    )
