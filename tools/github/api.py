"""tools/github/api.py

All GitHub HTTP calls live here.

A failed post raises; callers decide whether that fails the job.
"""

from __future__ import annotations

from typing import Any, Dict

import requests

from .types import GitHubConfig


def _headers(cfg: GitHubConfig) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {cfg.token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def post_issue_comment(cfg: GitHubConfig, body: str, *, timeout: int = 30) -> Dict[str, Any]:
    """Post *body* as a comment on the configured pull request.

    Returns the created comment payload. Raises ``requests.HTTPError`` on a
    non-2xx response.
    """

    url = f"{cfg.api_url}/repos/{cfg.repository}/issues/{cfg.pr_number}/comments"
    resp = requests.post(url, headers=_headers(cfg), json={"body": body}, timeout=timeout)
    resp.raise_for_status()
    return resp.json()
