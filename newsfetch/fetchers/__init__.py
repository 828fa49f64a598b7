"""Content fetching layer for the news API."""

from .guardian import (
    create_url,
    extract_stories,
    fetch_news_data,
    fetch_news_report,
    make_http_request,
    read_from_stream,
)

__all__ = [
    "create_url",
    "extract_stories",
    "fetch_news_data",
    "fetch_news_report",
    "make_http_request",
    "read_from_stream",
]
