from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

DATE_LENGTH = 10

# JSON keys of a single element of ``response.results``.
TITLE_KEY = "webTitle"
URL_KEY = "webUrl"
SECTION_KEY = "sectionName"
DATE_KEY = "webPublicationDate"


class StoryParseError(ValueError):
    """Raised when a results element cannot be turned into a ``Story``."""


def truncate_date(value: str) -> str:
    """Return the calendar date portion of an ISO-8601 timestamp.

    Values shorter than the date portion are returned unchanged.
    """
    return value[:DATE_LENGTH]


def _required_str(item: Mapping[str, Any], key: str) -> str:
    """Return ``item[key]`` as text.

    Numbers and booleans are stringified; ``null``, objects and arrays are
    rejected rather than turned into text like "null".
    """
    if key not in item:
        raise StoryParseError(f"Missing key '{key}' in result element")
    value = item[key]
    if value is None or isinstance(value, (dict, list)):
        raise StoryParseError(f"Key '{key}' is not a string value: {value!r}")
    return str(value)


@dataclass(frozen=True, slots=True)
class Story:
    """One news item from the results array."""

    title: str
    section: str
    date: str
    url: str

    @classmethod
    def from_result(cls, item: Any) -> "Story":
        if not isinstance(item, Mapping):
            raise StoryParseError(f"Result element is not an object: {type(item).__name__}")
        return cls(
            title=_required_str(item, TITLE_KEY),
            section=_required_str(item, SECTION_KEY),
            date=truncate_date(_required_str(item, DATE_KEY)),
            url=_required_str(item, URL_KEY),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
