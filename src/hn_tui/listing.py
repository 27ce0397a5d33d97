from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .datamodels import Item, ListingRequest, ListState

logger = logging.getLogger("hn")


class ListingTracker:
    """Tracks the load state of the headline list.

    Every call to begin() supersedes the previous request. Results are only
    applied by complete() when they belong to the latest request, so a slow
    load for a route we already left can never overwrite the current one.
    """

    def __init__(self) -> None:
        self.state = ListState.IDLE
        self.url: Optional[str] = None
        self.items: List[Item] = []
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, url: str) -> ListingRequest:
        self._generation += 1
        self.url = url
        self.state = ListState.LOADING
        logger.debug("Loading %s (generation %d)", url, self._generation)
        return ListingRequest(generation=self._generation, url=url)

    def is_current(self, request: ListingRequest) -> bool:
        return request.generation == self._generation and request.url == self.url

    def complete(self, request: ListingRequest, items: Iterable[Item]) -> bool:
        if not self.is_current(request):
            logger.debug(
                "Discarding stale results for %s (generation %d, current %d)",
                request.url,
                request.generation,
                self._generation,
            )
            return False
        self.items = list(items)
        self.state = ListState.READY
        return True
