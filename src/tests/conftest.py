from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import pytest

from hn_tui.datamodels import Item
from hn_tui.errors import NetworkFailure
from hn_tui.sources.base import Source


def make_item(item_id: int, **overrides) -> Item:
    fields = dict(
        id=item_id,
        title=f"Story {item_id}",
        url=f"https://example.com/{item_id}",
        score=item_id * 10,
        by="pg",
        time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        descendants=item_id,
    )
    fields.update(overrides)
    return Item(**fields)


class FakeSource(Source):
    """In-memory source.

    Items in `failing` raise NetworkFailure. An item with a gate waits for it
    before completing and then sets its entry in `releases`, which lets a test
    dictate the order in which fetches finish.
    """

    def __init__(
        self,
        listings: Dict[str, List[int]],
        failing: Iterable[int] = (),
        gates: Optional[Dict[int, threading.Event]] = None,
        releases: Optional[Dict[int, threading.Event]] = None,
    ):
        super().__init__({})
        self.listings = listings
        self.failing = set(failing)
        self.gates = gates or {}
        self.releases = releases or {}
        self.completed: List[int] = []
        self._lock = threading.Lock()

    def get_listing(self, url: str) -> List[int]:
        if url not in self.listings:
            raise NetworkFailure("no such listing", url=url)
        return list(self.listings[url])

    def get_item(self, item_id: int) -> Item:
        gate = self.gates.get(item_id)
        if gate is not None:
            assert gate.wait(timeout=5), f"item {item_id} was never released"
        with self._lock:
            self.completed.append(item_id)
        if item_id in self.releases:
            self.releases[item_id].set()
        if item_id in self.failing:
            raise NetworkFailure(f"item {item_id} failed")
        return make_item(item_id)


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def fake_source_class():
    return FakeSource
