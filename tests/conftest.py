from __future__ import annotations

import json
from typing import Any, Iterator, List, Optional

import pytest


class FakeResponse:
    """Stand-in for ``requests.Response`` used with ``stream=True``."""

    def __init__(
        self,
        status_code: int = 200,
        body: bytes = b"",
        *,
        error: Optional[BaseException] = None,
    ) -> None:
        self.status_code = status_code
        self._body = body
        self._error = error
        self.closed = False

    def iter_lines(self) -> Iterator[bytes]:
        for line in self._body.splitlines():
            yield line
        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def make_result(title: str = "T", url: str = "U", section: str = "S", date: str = "2021-05-01T10:00:00Z") -> dict:
    return {
        "webTitle": title,
        "webUrl": url,
        "sectionName": section,
        "webPublicationDate": date,
    }


def make_body(results: List[Any], *, indent: Optional[int] = None) -> bytes:
    return json.dumps({"response": {"status": "ok", "results": results}}, indent=indent).encode("utf-8")


@pytest.fixture
def fake_get(mocker):
    """Patch ``requests.get`` inside the fetcher; set ``return_value``/``side_effect`` per test."""
    return mocker.patch("newsfetch.fetchers.guardian.requests.get")


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "NEWSFETCH_CONNECT_TIMEOUT",
        "NEWSFETCH_READ_TIMEOUT",
        "NEWSFETCH_REQUEST_URL",
        "NEWSFETCH_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
