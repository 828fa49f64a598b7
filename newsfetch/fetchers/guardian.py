"""Fetch and parse stories from the Guardian content API.

The pipeline is linear: validate the URL, GET it, decode the body, pull the
story fields out of ``response.results``. Every stage returns a value and a
failed stage hands the next one an empty input, so nothing here raises to the
caller. Diagnostics go to the ``newsfetch.fetchers.guardian`` logger.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional
from urllib.parse import urlparse

import requests
import urllib3

from ..models import BodyResult, FailureKind, FetchReport, ParseResult, Story, StoryParseError
from ..utils.fetch_config import FetchConfig
from ..utils.logging import get_logger

logger = get_logger("newsfetch.fetchers.guardian")

HTTP_OK = 200
CONNECT_TIMEOUT = 15.0
READ_TIMEOUT = 10.0


def create_url(request_url: str | None) -> Optional[str]:
    """Return ``request_url`` if it is an absolute http(s) URL, else ``None``."""
    if not request_url:
        logger.error("Error with creating URL: empty request URL")
        return None
    try:
        parsed = urlparse(request_url.strip())
    except ValueError as exc:
        logger.error("Error with creating URL %r", request_url, exc_info=exc)
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        logger.error("Error with creating URL %r: not an absolute http(s) URL", request_url)
        return None
    return request_url.strip()


def read_from_stream(lines: Iterable[bytes]) -> str:
    """Join the body's lines into one string, dropping the line breaks."""
    return "".join(line.decode("utf-8", errors="replace") for line in lines)


def make_http_request(
    url: Optional[str],
    *,
    timeout: tuple[float, float] = (CONNECT_TIMEOUT, READ_TIMEOUT),
) -> BodyResult:
    """GET ``url`` and return its decoded body.

    Only HTTP 200 counts as success. A missing URL skips the request. Any
    other status and any ``requests`` or ``urllib3`` error give an empty body.
    ``timeout`` is the ``(connect, read)`` pair in seconds. The response
    is closed on every path.
    """
    if url is None:
        return BodyResult.empty()

    logger.debug("Requesting %s", url)
    try:
        with requests.get(url, timeout=timeout, stream=True) as resp:
            if resp.status_code != HTTP_OK:
                logger.error("Error response code: %s for %s", resp.status_code, url)
                return BodyResult.empty(FailureKind.HTTP_NON_SUCCESS)
            return BodyResult(text=read_from_stream(resp.iter_lines()))
    except (requests.RequestException, urllib3.exceptions.HTTPError) as exc:
        # urllib3 errors such as LocationParseError ("a..b") are not wrapped by requests
        logger.error("Problem retrieving the news JSON results from %s", url, exc_info=exc)
        return BodyResult.empty(FailureKind.NETWORK_IO_FAILURE)


def extract_stories(body: str | None) -> ParseResult:
    """Build ``Story`` records from a JSON body.

    An empty body yields ``stories=None``. A parse failure anywhere stops at
    that point and keeps the stories built before it.
    """
    if not body:
        return ParseResult(stories=None)

    stories: List[Story] = []
    try:
        payload = json.loads(body)
        if not isinstance(payload, dict):
            raise StoryParseError("Top-level JSON value is not an object")
        response = payload["response"]
        if not isinstance(response, dict):
            raise StoryParseError("'response' is not an object")
        results = response["results"]
        if not isinstance(results, list):
            raise StoryParseError("'response.results' is not an array")
        for item in results:
            stories.append(Story.from_result(item))
    except (ValueError, KeyError, TypeError, RecursionError) as exc:
        # json.JSONDecodeError and StoryParseError are both ValueErrors;
        # RecursionError comes from bodies nested past the interpreter limit
        logger.error("Problem parsing the news JSON results (kept=%d)", len(stories), exc_info=exc)
        return ParseResult(stories=stories, failure=FailureKind.JSON_PARSE_FAILURE)

    return ParseResult(stories=stories)


def fetch_news_report(request_url: str | None, *, config: FetchConfig | None = None) -> FetchReport:
    """Run the whole pipeline for one URL and record which stages failed."""
    cfg = config or FetchConfig()
    failures: List[FailureKind] = []

    url = create_url(request_url)
    if url is None:
        failures.append(FailureKind.URL_MALFORMED)

    body = make_http_request(url, timeout=cfg.timeout)
    if body.failure is not None:
        failures.append(body.failure)

    parsed = extract_stories(body.text)
    if parsed.failure is not None:
        failures.append(parsed.failure)

    if parsed.stories is not None:
        logger.info("Fetched %d stories from %s", len(parsed.stories), url)
    return FetchReport(url=request_url or "", stories=parsed.stories, failures=failures)


def fetch_news_data(request_url: str | None, *, config: FetchConfig | None = None) -> Optional[List[Story]]:
    """Query the news API and return its stories.

    Returns ``None`` when there was no body to parse (bad URL, non-200
    status, network failure, empty response) and a possibly partial list
    otherwise. Never raises.
    """
    return fetch_news_report(request_url, config=config).stories
