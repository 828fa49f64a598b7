from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List

from .fetchers import fetch_news_report
from .models import Feed, FetchReport
from .utils.fetch_config import FetchConfig
from .utils.logging import get_logger

logger = get_logger("newsfetch.runner")


@dataclass(slots=True)
class FeedResult:
    feed: Feed
    report: FetchReport


class FeedRunner:
    """Fetch several feeds, one independent request per feed."""

    def __init__(self, config: FetchConfig | None = None) -> None:
        self.config = config or FetchConfig()

    def _fetch_feed(self, feed: Feed) -> FeedResult:
        logger.debug("Fetching feed %s", feed.name)
        return FeedResult(feed=feed, report=fetch_news_report(feed.url, config=self.config))

    def fetch_all(self, feeds: Iterable[Feed]) -> List[FeedResult]:
        """Fetch all feeds on a thread pool.

        Results come back in the order the feeds were given.
        """
        feed_list = list(feeds)
        if not feed_list:
            return []

        max_workers = max(1, min(self.config.max_workers, len(feed_list)))
        logger.debug("Starting fetch for %d feeds (workers=%d)", len(feed_list), max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(self._fetch_feed, feed_list))

        total = sum(r.report.count for r in results)
        empty = sum(1 for r in results if r.report.stories is None)
        logger.info(
            "Fetch complete: stories=%d from feeds=%d (no data=%d)",
            total,
            len(feed_list),
            empty,
        )
        return results
