"""Explicit stage results for the fetch pipeline.

Each stage hands the next one a value instead of raising: a failed stage
degrades to the next stage's "empty" input and records what went wrong.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .story import Story


class FailureKind(str, Enum):
    URL_MALFORMED = "url_malformed"
    HTTP_NON_SUCCESS = "http_non_success"
    NETWORK_IO_FAILURE = "network_io_failure"
    JSON_PARSE_FAILURE = "json_parse_failure"


@dataclass(slots=True)
class BodyResult:
    text: str = ""
    failure: Optional[FailureKind] = None

    @classmethod
    def empty(cls, failure: Optional[FailureKind] = None) -> "BodyResult":
        return cls(text="", failure=failure)


@dataclass(slots=True)
class ParseResult:
    # None means there was no body to parse at all.
    stories: Optional[List[Story]]
    failure: Optional[FailureKind] = None


@dataclass(slots=True)
class FetchReport:
    url: str
    stories: Optional[List[Story]]
    failures: List[FailureKind] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures and self.stories is not None

    @property
    def partial(self) -> bool:
        """True when parsing stopped early but some stories were kept."""
        return FailureKind.JSON_PARSE_FAILURE in self.failures and bool(self.stories)

    @property
    def count(self) -> int:
        return len(self.stories or [])
