from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from hn_tui.errors import NetworkFailure, ParseFailure
from hn_tui.fetcher import Fetcher
from hn_tui.sources.hackernews import HackerNewsSource, parse_item

TOP = "https://hacker-news.firebaseio.com/v0/topstories.json"


def _response(payload=None, json_error=None, status_error=None):
    resp = MagicMock()
    if json_error:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    if status_error:
        resp.raise_for_status.side_effect = status_error
    return resp


@pytest.fixture
def hn_source():
    return HackerNewsSource({"limit": 3})


def test_get_listing_caps_ids(hn_source):
    with patch.object(hn_source.session, "get") as mock_get:
        mock_get.return_value = _response([8, 6, 7, 5, 3, 0, 9])
        assert hn_source.get_listing(TOP) == [8, 6, 7]
        mock_get.assert_called_once_with(TOP, timeout=hn_source.timeout)


def test_get_listing_null_is_empty(hn_source):
    with patch.object(hn_source.session, "get") as mock_get:
        mock_get.return_value = _response(None)
        assert hn_source.get_listing(TOP) == []


@pytest.mark.parametrize("payload", [{"ids": [1]}, [1, "2"], [True, 2], "oops"])
def test_get_listing_rejects_unexpected_shapes(hn_source, payload):
    with patch.object(hn_source.session, "get") as mock_get:
        mock_get.return_value = _response(payload)
        with pytest.raises(ParseFailure):
            hn_source.get_listing(TOP)


def test_get_listing_bad_json(hn_source):
    with patch.object(hn_source.session, "get") as mock_get:
        mock_get.return_value = _response(json_error=ValueError("Expecting value"))
        with pytest.raises(ParseFailure) as excinfo:
            hn_source.get_listing(TOP)
        assert excinfo.value.url == TOP


def test_get_listing_connection_error(hn_source):
    with patch.object(hn_source.session, "get") as mock_get:
        mock_get.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(NetworkFailure):
            hn_source.get_listing(TOP)


def test_get_listing_http_error(hn_source):
    with patch.object(hn_source.session, "get") as mock_get:
        mock_get.return_value = _response(
            [], status_error=requests.HTTPError("404 Client Error")
        )
        with pytest.raises(NetworkFailure):
            hn_source.get_listing(TOP)


def test_get_item(hn_source):
    with patch.object(hn_source.session, "get") as mock_get:
        mock_get.return_value = _response(
            {
                "by": "dhouston",
                "descendants": 71,
                "id": 8863,
                "score": 111,
                "time": 1175714200,
                "title": "My YC app: Dropbox - Throw away your USB drive",
                "type": "story",
                "url": "http://www.getdropbox.com/u/2/screencast.html",
            }
        )
        item = hn_source.get_item(8863)

        mock_get.assert_called_once_with(
            "https://hacker-news.firebaseio.com/v0/item/8863.json",
            timeout=hn_source.timeout,
        )
    assert item.id == 8863
    assert item.by == "dhouston"
    assert item.score == 111
    assert item.descendants == 71
    assert item.time == datetime.fromtimestamp(1175714200, tz=timezone.utc)
    assert item.domain == "getdropbox.com"
    assert item.link == item.url
    assert item.discussion_url == "https://news.ycombinator.com/item?id=8863"


def test_parse_item_defaults_and_text():
    item = parse_item(
        {
            "id": 121003,
            "title": "Ask HN: The Arc Effect",
            "type": "story",
            "text": "<i>or</i> HN: the Next Iteration<p>It&#x27;s been a while",
        }
    )
    assert item.url is None
    assert item.score == 0
    assert item.descendants == 0
    assert item.by == ""
    assert item.domain == ""
    assert item.link == "https://news.ycombinator.com/item?id=121003"
    assert "or HN: the Next Iteration" in item.text
    assert "It's been a while" in item.text
    assert "<p>" not in item.text


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"title": "no id"},
        {"id": "12", "title": "string id"},
        {"id": 12},
        {"id": 12, "title": ""},
        {"id": 12, "deleted": True},
        {"id": 12, "title": "bad score", "score": "lots"},
        {"id": 3, "title": "t", "url": 123},
        {"id": 3, "title": "t", "url": ["https://example.com"]},
        {"id": 3, "title": "x", "text": 42},
        {"id": 3, "title": "x", "text": {"html": "<p>hi"}},
    ],
)
def test_parse_item_rejects_bad_records(payload):
    with pytest.raises(ParseFailure):
        parse_item(payload)


def _serve(records):
    """Route session.get calls to canned JSON records keyed by URL."""

    def get(url, timeout=None):
        return _response(records[url])

    return get


def test_records_with_bad_field_types_are_dropped_from_stories():
    source = HackerNewsSource({})
    item_url = source.item_url
    records = {
        TOP: [5, 3, 9, 4],
        item_url(5): {"id": 5, "title": "five"},
        item_url(3): {"id": 3, "title": "three", "text": 42},
        item_url(9): {"id": 9, "title": "nine", "url": "https://example.com/9"},
        item_url(4): {"id": 4, "title": "four", "url": 123},
    }
    with patch.object(source.session, "get", side_effect=_serve(records)):
        stories = Fetcher(source).get_stories(TOP)
    assert [s.id for s in stories] == [5, 9]


@pytest.mark.parametrize("timeout, expected", [("15", 15.0), (3, 3.0), ("soon", 15.0)])
def test_timeout_is_coerced_to_a_number(timeout, expected):
    assert HackerNewsSource({"timeout": timeout}).timeout == expected
