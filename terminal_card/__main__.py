#!/usr/bin/env python3
"""Fetch stats, write the SVG card and print a summary."""

from __future__ import annotations
import datetime
import logging
import sys
import time
from typing import Callable, Dict, Optional

from .aggregator import StatsAggregator
from .config import Config
from .errors import ProfileError
from .models import AggregatedStats
from .renderer import write_svg

logger = logging.getLogger(__name__)


def print_summary(stats: AggregatedStats):
    account = stats.account
    print("\n=== GitHub Profile Stats ===")
    print(f"Followers: {account.followers}")
    print(f"Following: {account.following}")
    print(f"Public Repos: {account.public_repos}")
    print(f"Total Stars: {stats.stars}")
    print(f"Total Commits: {stats.total_commits}")
    print(f"Most Used Languages: {stats.most_used_languages}")
    print(f"Bio: {stats.bio}")


def run(config: Config, clock: Optional[Callable[[], datetime.datetime]] = None) -> AggregatedStats:
    aggregator = StatsAggregator(config)
    stats = aggregator.run()

    logger.info("Generating SVG...")
    now = clock() if clock else config.now()
    write_svg(config.output_file, stats, config.user_name, now)
    logger.info("Successfully generated %s", config.output_file)

    print_summary(stats)
    counts: Dict[str, int] = aggregator.client.request_counts
    print("API request counts:", counts)
    return stats


def main(environ=None, clock: Optional[Callable[[], datetime.datetime]] = None) -> int:
    try:
        config = Config.from_env(environ)
    except ProfileError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting GitHub profile card generator for %s", config.user_name)

    t0 = time.time()
    try:
        run(config, clock)
    except ProfileError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    print("Done in {:.2f}s".format(time.time() - t0))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
