from __future__ import annotations

import logging

import requests
import urllib3

from conftest import FakeResponse, make_body, make_result
from newsfetch.fetchers import guardian
from newsfetch.models import FailureKind, Story
from newsfetch.utils.fetch_config import FetchConfig

URL = "https://content.guardianapis.com/search?q=debates&api-key=test"


def test_fetch_returns_stories_in_order(fake_get) -> None:
    results = [make_result(title=f"T{i}", url=f"U{i}", date=f"2021-05-0{i}T10:00:00Z") for i in range(1, 4)]
    fake_get.return_value = FakeResponse(200, make_body(results))

    stories = guardian.fetch_news_data(URL)

    assert [s.title for s in stories] == ["T1", "T2", "T3"]
    assert [s.date for s in stories] == ["2021-05-01", "2021-05-02", "2021-05-03"]
    assert all(len(s.date) == 10 for s in stories)


def test_request_uses_get_with_timeouts_and_no_headers(fake_get, clean_env) -> None:
    fake_get.return_value = FakeResponse(200, make_body([]))

    guardian.fetch_news_data(URL)

    fake_get.assert_called_once_with(URL, timeout=(15.0, 10.0), stream=True)


def test_request_uses_configured_timeouts(fake_get) -> None:
    fake_get.return_value = FakeResponse(200, make_body([]))
    config = FetchConfig(connect_timeout=3.0, read_timeout=2.0, request_url="", max_workers=1)

    guardian.fetch_news_data(URL, config=config)

    assert fake_get.call_args.kwargs["timeout"] == (3.0, 2.0)


def test_non_200_status_returns_none_and_closes(fake_get, caplog) -> None:
    resp = FakeResponse(500, make_body([make_result()]))
    fake_get.return_value = resp

    with caplog.at_level(logging.ERROR, logger="newsfetch.fetchers.guardian"):
        report = guardian.fetch_news_report(URL)

    assert report.stories is None
    assert report.failures == [FailureKind.HTTP_NON_SUCCESS]
    assert resp.closed
    assert "Error response code: 500" in caplog.text


def test_no_content_status_is_not_success(fake_get) -> None:
    fake_get.return_value = FakeResponse(204, b"")
    assert guardian.fetch_news_data(URL) is None


def test_malformed_url_skips_network(fake_get, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="newsfetch.fetchers.guardian"):
        report = guardian.fetch_news_report("not a url")

    assert report.stories is None
    assert report.failures == [FailureKind.URL_MALFORMED]
    fake_get.assert_not_called()
    assert "Error with creating URL" in caplog.text


def test_empty_url_returns_none(fake_get) -> None:
    assert guardian.fetch_news_data("") is None
    assert guardian.fetch_news_data(None) is None
    fake_get.assert_not_called()


def test_network_error_returns_none(fake_get) -> None:
    fake_get.side_effect = requests.ConnectionError("refused")

    report = guardian.fetch_news_report(URL)

    assert report.stories is None
    assert report.failures == [FailureKind.NETWORK_IO_FAILURE]


def test_timeout_returns_none(fake_get) -> None:
    fake_get.side_effect = requests.Timeout("slow")
    assert guardian.fetch_news_data(URL) is None


def test_error_while_reading_body_closes_response(fake_get) -> None:
    resp = FakeResponse(200, b'{"response":', error=requests.exceptions.ChunkedEncodingError("cut"))
    fake_get.return_value = resp

    report = guardian.fetch_news_report(URL)

    assert report.stories is None
    assert report.failures == [FailureKind.NETWORK_IO_FAILURE]
    assert resp.closed


def test_successful_response_is_closed(fake_get) -> None:
    resp = FakeResponse(200, make_body([make_result()]))
    fake_get.return_value = resp

    guardian.fetch_news_data(URL)

    assert resp.closed


def test_multiline_body_is_joined_without_separators(fake_get) -> None:
    fake_get.return_value = FakeResponse(200, make_body([make_result(), make_result(title="T2")], indent=2))

    stories = guardian.fetch_news_data(URL)

    assert [s.title for s in stories] == ["T", "T2"]


def test_read_from_stream_drops_line_breaks() -> None:
    body = "line one\nline two\r\nline three\rend".encode("utf-8")
    assert guardian.read_from_stream(body.splitlines()) == "line oneline twoline threeend"


def test_read_from_stream_decodes_utf8() -> None:
    assert guardian.read_from_stream(["Zoë's café".encode("utf-8")]) == "Zoë's café"


def test_read_from_stream_replaces_invalid_bytes() -> None:
    assert guardian.read_from_stream([b"ok\xff"]) == "ok\ufffd"


def test_empty_body_is_absent_not_empty_list(fake_get) -> None:
    fake_get.return_value = FakeResponse(200, b"")
    assert guardian.fetch_news_data(URL) is None

    fake_get.return_value = FakeResponse(200, make_body([]))
    assert guardian.fetch_news_data(URL) == []


def test_missing_key_keeps_earlier_stories(fake_get) -> None:
    broken = make_result(title="T3")
    del broken["webUrl"]
    results = [make_result(title="T1"), make_result(title="T2"), broken, make_result(title="T4")]
    fake_get.return_value = FakeResponse(200, make_body(results))

    report = guardian.fetch_news_report(URL)

    assert [s.title for s in report.stories] == ["T1", "T2"]
    assert report.failures == [FailureKind.JSON_PARSE_FAILURE]
    assert report.partial


def test_extract_invalid_json_returns_empty_list() -> None:
    parsed = guardian.extract_stories("{not json")
    assert parsed.stories == []
    assert parsed.failure is FailureKind.JSON_PARSE_FAILURE


def test_extract_missing_results_returns_empty_list() -> None:
    parsed = guardian.extract_stories('{"response": {"status": "error"}}')
    assert parsed.stories == []
    assert parsed.failure is FailureKind.JSON_PARSE_FAILURE


def test_extract_results_not_array() -> None:
    parsed = guardian.extract_stories('{"response": {"results": {"webTitle": "T"}}}')
    assert parsed.stories == []
    assert parsed.failure is FailureKind.JSON_PARSE_FAILURE


def test_extract_top_level_array() -> None:
    parsed = guardian.extract_stories("[1, 2]")
    assert parsed.stories == []
    assert parsed.failure is FailureKind.JSON_PARSE_FAILURE


def test_extract_short_date_is_kept() -> None:
    parsed = guardian.extract_stories(make_body([make_result(date="2021")]).decode("utf-8"))
    assert parsed.failure is None
    assert parsed.stories == [Story(title="T", section="S", date="2021", url="U")]


def test_create_url() -> None:
    assert guardian.create_url(URL) == URL
    assert guardian.create_url("ftp://example.com/file") is None
    assert guardian.create_url("/search?q=x") is None
    assert guardian.create_url("http://[::1") is None


def test_urllib3_error_returns_none(fake_get) -> None:
    fake_get.side_effect = urllib3.exceptions.LocationParseError("a..b")

    report = guardian.fetch_news_report("http://a..b/")

    assert report.stories is None
    assert report.failures == [FailureKind.NETWORK_IO_FAILURE]


def test_host_with_empty_label_does_not_raise() -> None:
    # Real requests.get: the host fails to parse before any connection is made
    config = FetchConfig(connect_timeout=1.0, read_timeout=1.0, request_url="", max_workers=1)

    report = guardian.fetch_news_report("http://a..b/", config=config)

    assert report.stories is None
    assert report.failures == [FailureKind.NETWORK_IO_FAILURE]


def test_deeply_nested_body_is_a_parse_failure(fake_get) -> None:
    fake_get.return_value = FakeResponse(200, b"[" * 100000 + b"]" * 100000)

    report = guardian.fetch_news_report(URL)

    assert report.stories == []
    assert report.failures == [FailureKind.JSON_PARSE_FAILURE]
