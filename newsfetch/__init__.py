"""Top-level package for newsfetch.

Fetches a news API query URL and turns its JSON ``response.results`` array
into ``Story`` records.
"""

from .fetchers import fetch_news_data, fetch_news_report
from .models import FailureKind, FetchReport, Story

__all__ = ["fetch_news_data", "fetch_news_report", "FailureKind", "FetchReport", "Story"]
