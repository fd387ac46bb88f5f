"""
Terminal-style GitHub profile card.

Fetches a user's public stats and writes them into a fake tty login screen:
- Followers / following
- Public repo count
- Star count (via the star counter service)
- Commits (first page per non-fork, non-archived repo)
- Most used languages (by repo count)
- Bio

Environment Variables:
  USER_NAME       : GitHub login. Defaults to GITHUB_ACTOR / repository owner.
  OUTPUT_FILE     : Output SVG path. Default terminal.svg.
  API_BASE_URL    : GitHub REST base URL.
  STAR_API_URL    : Star counter service base URL.
  REQUEST_TIMEOUT : Seconds per request. Default 30.
  TIMEZONE        : IANA zone for the "Last login" clock. Default local.
  DEBUG           : '1' => debug logging.
"""

from .aggregator import StatsAggregator, format_bio, rank_languages, tally_languages
from .config import Config
from .errors import ConfigError, DecodeError, ProfileError, StatusError, TransportError, WriteError
from .models import Account, AggregatedStats, RepositorySummary
from .renderer import build_svg, render_svg, write_svg

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AggregatedStats",
    "Config",
    "ConfigError",
    "DecodeError",
    "ProfileError",
    "RepositorySummary",
    "StatsAggregator",
    "StatusError",
    "TransportError",
    "WriteError",
    "build_svg",
    "format_bio",
    "rank_languages",
    "render_svg",
    "tally_languages",
    "write_svg",
]
