from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import API_BASE, REQUEST_HEADERS, get_float, get_int
from ..datamodels import Item
from ..errors import NetworkFailure, ParseFailure
from .base import Source

logger = logging.getLogger("hn")


class HackerNewsSource(Source):
    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.api_base = str(self.config.get("api_base", API_BASE)).rstrip("/")
        self.limit = get_int(self.config, "limit")
        self.timeout = get_float(self.config, "timeout")
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        retries = Retry(
            total=5, backoff_factor=0.3, status_forcelist=[429, 500, 502, 503, 504]
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def _get_json(self, url: str) -> Any:
        try:
            logger.debug("Fetching %s", url)
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise NetworkFailure(f"Request failed: {e}", url=url) from e
        try:
            return resp.json()
        except ValueError as e:
            raise ParseFailure(f"Response is not JSON: {e}", url=url) from e

    def item_url(self, item_id: int) -> str:
        return f"{self.api_base}/item/{item_id}.json"

    def get_listing(self, url: str) -> List[int]:
        data = self._get_json(url)
        if data is None:
            return []
        if not isinstance(data, list) or not all(_is_int(i) for i in data):
            raise ParseFailure("Expected a JSON array of item ids", url=url)
        ids = data[: self.limit]
        logger.debug("Listing %s: %d ids (of %d)", url, len(ids), len(data))
        return ids

    def get_item(self, item_id: int) -> Item:
        url = self.item_url(item_id)
        return parse_item(self._get_json(url), url=url)


def parse_item(data: Any, url: Optional[str] = None) -> Item:
    """Build an Item from an API record, raising ParseFailure on bad shapes."""
    if not isinstance(data, dict):
        raise ParseFailure("Expected a JSON object for the item", url=url)
    if data.get("deleted"):
        raise ParseFailure("Item has been deleted", url=url)
    item_id = data.get("id")
    title = data.get("title")
    if not _is_int(item_id):
        raise ParseFailure("Item has no valid id", url=url)
    if not isinstance(title, str) or not title:
        raise ParseFailure(f"Item {item_id} has no title", url=url)
    for field in ("url", "text"):
        if data.get(field) is not None and not isinstance(data[field], str):
            raise ParseFailure(f"Item {item_id} has a non-text {field}", url=url)
    try:
        return Item(
            id=item_id,
            title=title,
            url=data.get("url") or None,
            score=int(data.get("score") or 0),
            by=str(data.get("by") or ""),
            time=datetime.fromtimestamp(int(data.get("time") or 0), tz=timezone.utc),
            descendants=int(data.get("descendants") or 0),
            type=str(data.get("type") or "story"),
            text=_html_to_text(data.get("text")),
        )
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise ParseFailure(f"Item {item_id} has invalid fields: {e}", url=url) from e


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _html_to_text(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    # Item bodies are HTML fragments with <p> separating paragraphs.
    soup = BeautifulSoup(text.replace("<p>", "\n\n<p>"), "lxml")
    return soup.get_text().strip() or None
