from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from sizebot.errors import ConfigError


GITHUB_API_DEFAULT = "https://api.github.com"


@dataclass(frozen=True)
class GitHubConfig:
    """Where and as whom to post a pull-request comment."""
    repository: str  # "owner/name"
    pr_number: int
    token: str
    api_url: str = GITHUB_API_DEFAULT

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GitHubConfig":
        source = os.environ if env is None else env

        token = str(source.get("GITHUB_TOKEN") or "").strip()
        repo = str(source.get("GITHUB_REPOSITORY") or "").strip()
        pr_raw = str(source.get("SIZEBOT_PR_NUMBER") or "").strip()
        if not token:
            raise ConfigError("GITHUB_TOKEN is not set.")
        if "/" not in repo:
            raise ConfigError("GITHUB_REPOSITORY must look like 'owner/name'.")
        if not pr_raw.isdigit():
            raise ConfigError("SIZEBOT_PR_NUMBER must be a pull request number.")

        api_url = str(source.get("GITHUB_API_URL") or GITHUB_API_DEFAULT).rstrip("/")
        return cls(repository=repo, pr_number=int(pr_raw), token=token, api_url=api_url)
