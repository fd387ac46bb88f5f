"""Thin REST client for the GitHub API and the star counter service."""

from __future__ import annotations
import logging
import re
from typing import Any, Dict, List, Optional

import requests

from .config import Config
from .errors import DecodeError, StatusError, TransportError
from .models import Account, RepositorySummary

logger = logging.getLogger(__name__)

HEADERS = {
    "Accept": "application/vnd.github+json",
    "User-Agent": "terminal-card",
}

# commits_url comes back as ".../commits{/sha}"
URL_TEMPLATE = re.compile(r"\{[^}]*\}")


def strip_url_template(url: str) -> str:
    return URL_TEMPLATE.sub("", url)


class GitHubClient:
    """One blocking GET per call, no retries. Every failure maps to a ProfileError."""

    def __init__(self, config: Config):
        self.config = config
        self.request_counts: Dict[str, int] = {
            "account": 0,
            "stars": 0,
            "repos": 0,
            "commits": 0,
        }

    def fetch_json(self, url: str, tag: str, params: Optional[Dict[str, Any]] = None) -> Any:
        self.request_counts[tag] = self.request_counts.get(tag, 0) + 1
        logger.debug("%s: GET %s %s", tag, url, params or "")
        try:
            r = requests.get(url, params=params, headers=HEADERS, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(f"failed to fetch {url}: {e}") from e
        if r.status_code != 200:
            raise StatusError(
                f"API request failed with status: {r.status_code} for URL: {url}",
                status_code=r.status_code,
                url=url,
            )
        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON from {url}: {e}") from e

    def get_account(self, login: str) -> Account:
        data = self.fetch_json(f"{self.config.api_base_url}/users/{login}", "account")
        return Account.from_payload(data)

    def get_star_total(self, login: str) -> int:
        data = self.fetch_json(f"{self.config.star_api_url}/user/{login}", "stars")
        if not isinstance(data, dict):
            raise DecodeError(f"star count: expected a JSON object, got {type(data).__name__}")
        stars = data.get("stars")
        if isinstance(stars, bool) or not isinstance(stars, int):
            raise DecodeError(f"star count: field 'stars' is not an integer: {stars!r}")
        return stars

    def get_repositories(self, login: str) -> List[RepositorySummary]:
        # A single page is enough for a personal account
        data = self.fetch_json(
            f"{self.config.api_base_url}/users/{login}/repos",
            "repos",
            params={"per_page": self.config.page_size},
        )
        if not isinstance(data, list):
            raise DecodeError(f"repositories: expected a JSON array, got {type(data).__name__}")
        return [RepositorySummary.from_payload(item) for item in data]

    def count_commits(self, repo: RepositorySummary) -> int:
        """Number of commits on the first page of the repository's history.

        Only the length of the array matters, so items are not decoded.
        """
        data = self.fetch_json(
            strip_url_template(repo.commits_url),
            "commits",
            params={"per_page": self.config.page_size},
        )
        if not isinstance(data, list):
            raise DecodeError(f"commits for {repo.name}: expected a JSON array, got {type(data).__name__}")
        return len(data)
