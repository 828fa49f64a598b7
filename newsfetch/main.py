"""Command-line entrypoint for newsfetch.

1) load configuration (.env, feeds file, --url flags)
2) fetch every feed
3) print the stories as text lines or JSON
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, Sequence, TextIO

from dotenv import load_dotenv

from .models import Feed
from .runner import FeedResult, FeedRunner
from .utils.config_loader import ConfigError, load_feeds_config
from .utils.fetch_config import FetchConfig
from .utils.logging import configure_logging, get_logger

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_NO_DATA = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch stories from a news API query URL")
    parser.add_argument(
        "--url",
        action="append",
        default=[],
        help="Fully formed request URL (repeatable)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a feeds configuration file (YAML)",
    )
    parser.add_argument(
        "--output",
        default="text",
        choices=["text", "json"],
        help="Output format for fetched stories",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def _collect_feeds(args: argparse.Namespace, config: FetchConfig) -> List[Feed]:
    feeds: List[Feed] = []
    if args.config:
        feeds.extend(load_feeds_config(args.config))
    for i, url in enumerate(args.url, start=1):
        feeds.append(Feed(name=f"url-{i}", url=url))
    if not feeds and config.request_url:
        feeds.append(Feed(name="default", url=config.request_url))
    return feeds


def _write_text(results: List[FeedResult], out: TextIO) -> None:
    for result in results:
        stories = result.report.stories
        if stories is None:
            out.write(f"# {result.feed.name}: no data\n")
            continue
        out.write(f"# {result.feed.name}: {len(stories)} stories\n")
        for story in stories:
            out.write(f"{story.date}\t{story.section}\t{story.title}\t{story.url}\n")


def _write_json(results: List[FeedResult], out: TextIO) -> None:
    doc = [
        {
            "feed": result.feed.name,
            "url": result.feed.url,
            "stories": None if result.report.stories is None else [s.to_dict() for s in result.report.stories],
            "failures": [f.value for f in result.report.failures],
        }
        for result in results
    ]
    json.dump(doc, out, ensure_ascii=False, indent=2)
    out.write("\n")


def main(argv: Optional[Sequence[str]] = None, *, out: TextIO | None = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    try:
        configure_logging(level=args.log_level)
    except ValueError as exc:
        sys.stderr.write(f"Invalid logging configuration: {exc}\n")
        return EXIT_CONFIG
    logger = get_logger("newsfetch.cli")
    out = out or sys.stdout

    config = FetchConfig()
    try:
        feeds = _collect_feeds(args, config)
    except ConfigError as exc:
        logger.error("Failed to load configuration: %s", exc)
        return EXIT_CONFIG

    if not feeds:
        logger.error("No request URL given; pass --url, --config or set NEWSFETCH_REQUEST_URL")
        return EXIT_CONFIG

    logger.info("Fetching %d feed(s)", len(feeds))
    results = FeedRunner(config).fetch_all(feeds)

    if args.output == "json":
        _write_json(results, out)
    else:
        _write_text(results, out)

    if any(r.report.stories is None for r in results):
        return EXIT_NO_DATA
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
