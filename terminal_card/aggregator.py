"""Collects the raw API data and derives the numbers shown on the card."""

from __future__ import annotations
import logging
import re
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar

from .client import GitHubClient
from .config import Config, EXCLUDED_LANGUAGES
from .errors import ProfileError
from .models import AggregatedStats, RepositorySummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Characters XML 1.0 cannot carry (C0 controls other than tab/LF/CR, surrogates, U+FFFE/U+FFFF)
XML_INVALID = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f" + chr(0xD800) + "-" + chr(0xDFFF) + chr(0xFFFE) + chr(0xFFFF) + "]"
)


def format_bio(bio: Optional[str], max_len: int = 45, placeholder: str = "New user") -> str:
    bio = XML_INVALID.sub("", bio or "") or placeholder
    if len(bio) > max_len:
        return bio[:max_len] + "..."
    return bio


def tally_languages(
    repos: Iterable[RepositorySummary],
    excluded: Iterable[str] = EXCLUDED_LANGUAGES,
) -> Dict[str, int]:
    """Primary-language counts over counted repositories, in first-seen order."""
    excluded = frozenset(excluded)
    tally: Dict[str, int] = {}
    for repo in repos:
        if repo.counted and repo.language and repo.language not in excluded:
            tally[repo.language] = tally.get(repo.language, 0) + 1
    return tally


def rank_languages(tally: Mapping[str, int], max_len: int = 35) -> str:
    """Join languages by descending count into a ", " list of at most `max_len` chars.

    Equal counts keep their order in `tally`. The first language that does not
    fit ends the list; shorter ones further down are not tried.
    """
    ranked = sorted(tally.items(), key=lambda item: -item[1])
    names: List[str] = []
    length = 0
    for name, _ in ranked:
        needed = len(name) + (2 if names else 0)
        if length + needed > max_len:
            break
        names.append(name)
        length += needed
    return ", ".join(names)


class StatsAggregator:
    """Runs the fetch sequence once and exposes the result as AggregatedStats."""

    def __init__(self, config: Config, client: Optional[GitHubClient] = None):
        self.config = config
        self.client = client or GitHubClient(config)

    def _step(self, description: str, fetch: Callable[..., T], *args) -> T:
        logger.info("Fetching %s...", description)
        try:
            return fetch(*args)
        except ProfileError as exc:
            raise exc.with_context(f"failed to fetch {description}") from exc

    def run(self) -> AggregatedStats:
        login = self.config.user_name
        account = self._step("user data", self.client.get_account, login)
        stars = self._step("star count", self.client.get_star_total, login)
        repos = self._step("repositories", self.client.get_repositories, login)

        logger.info("Counting commits and analyzing languages...")
        total_commits, languages = self.compute_commits_and_languages(repos)

        return AggregatedStats(
            account=account,
            stars=stars,
            total_commits=total_commits,
            most_used_languages=languages,
            bio=format_bio(account.bio, self.config.max_bio_len, self.config.bio_placeholder),
        )

    def compute_commits_and_languages(self, repos: List[RepositorySummary]) -> Tuple[int, str]:
        tally = tally_languages(repos, self.config.excluded_languages)
        total_commits = 0
        for repo in repos:
            if not repo.counted:
                logger.debug("Skipping %s (fork=%s archived=%s)", repo.name, repo.is_fork, repo.is_archived)
                continue
            try:
                commits = self.client.count_commits(repo)
            except ProfileError as exc:
                logger.warning("Could not fetch commits for repo %s: %s", repo.name, exc)
                continue
            logger.debug("%s: %d commits", repo.name, commits)
            total_commits += commits

        return total_commits, rank_languages(tally, self.config.max_lang_len)
