"""Runtime configuration read from the environment."""

from __future__ import annotations
import datetime
import logging
import os
from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional

from dateutil import tz

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_STAR_API_URL = "https://api.github-star-counter.workers.dev"
DEFAULT_OUTPUT_FILE = "terminal.svg"
DEFAULT_TIMEOUT = 30.0

# Not representative of what the user actually writes
EXCLUDED_LANGUAGES = frozenset({"HTML", "Jupyter Notebook", "Brainfuck"})


@dataclass(frozen=True)
class Config:
    user_name: str
    api_base_url: str = DEFAULT_API_BASE_URL
    star_api_url: str = DEFAULT_STAR_API_URL
    output_file: str = DEFAULT_OUTPUT_FILE
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = 100
    max_bio_len: int = 45
    max_lang_len: int = 35
    bio_placeholder: str = "New user"
    excluded_languages: FrozenSet[str] = EXCLUDED_LANGUAGES
    timezone: Optional[str] = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a config from USER_NAME, OUTPUT_FILE, API_BASE_URL, STAR_API_URL,
        REQUEST_TIMEOUT, TIMEZONE and DEBUG.

        The login falls back to GITHUB_ACTOR and then to the owner part of
        GITHUB_REPOSITORY, so the card builds unattended inside Actions.
        """
        env = os.environ if environ is None else environ

        repository = env.get("GITHUB_REPOSITORY", "")
        default_owner = repository.split("/")[0] if "/" in repository else ""
        user_name = env.get("USER_NAME") or env.get("GITHUB_ACTOR") or default_owner
        if not user_name:
            raise ConfigError("Cannot infer USER_NAME. Set USER_NAME env variable.")

        timeout_str = env.get("REQUEST_TIMEOUT", "")
        timeout = DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                logger.warning("Invalid REQUEST_TIMEOUT %r. Using default %.0fs.", timeout_str, DEFAULT_TIMEOUT)
            else:
                if timeout <= 0:
                    logger.warning("REQUEST_TIMEOUT must be positive. Using default %.0fs.", DEFAULT_TIMEOUT)
                    timeout = DEFAULT_TIMEOUT

        return cls(
            user_name=user_name,
            api_base_url=env.get("API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            star_api_url=env.get("STAR_API_URL", DEFAULT_STAR_API_URL).rstrip("/"),
            output_file=env.get("OUTPUT_FILE") or DEFAULT_OUTPUT_FILE,
            timeout=timeout,
            timezone=env.get("TIMEZONE") or None,
            debug=env.get("DEBUG", "0") == "1",
        )

    def tzinfo(self) -> datetime.tzinfo:
        """Zone used for the "Last login" clock; unknown names fall back to local time."""
        if self.timezone:
            zone = tz.gettz(self.timezone)
            if zone is not None:
                return zone
            logger.warning("Unknown TIMEZONE %r. Using local time.", self.timezone)
        return tz.tzlocal()

    def now(self) -> datetime.datetime:
        return datetime.datetime.now(self.tzinfo())
