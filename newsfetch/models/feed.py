from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Feed:
    """A named, fully formed request URL from the feeds file."""

    name: str
    url: str
