"""Typed models used across the application."""

from .feed import Feed
from .story import Story, StoryParseError, truncate_date
from .outcome import BodyResult, FailureKind, FetchReport, ParseResult

__all__ = [
    "Feed",
    "Story",
    "StoryParseError",
    "truncate_date",
    "BodyResult",
    "FailureKind",
    "FetchReport",
    "ParseResult",
]
