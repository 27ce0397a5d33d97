from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from urllib.parse import urlparse

from .config import DISCUSSION_URL


# --- Data models ---
@dataclass(frozen=True)
class Item:
    id: int
    title: str
    url: Optional[str]
    score: int
    by: str
    time: datetime
    descendants: int
    type: str = "story"
    text: Optional[str] = None

    @property
    def discussion_url(self) -> str:
        return DISCUSSION_URL.format(id=self.id)

    @property
    def link(self) -> str:
        """The story link, or the discussion page for self posts."""
        return self.url or self.discussion_url

    @property
    def domain(self) -> str:
        if not self.url:
            return ""
        host = urlparse(self.url).netloc
        return host[4:] if host.startswith("www.") else host


class Route(Enum):
    TOP = "/"
    NEW = "/new"

    @property
    def title(self) -> str:
        return ROUTE_TITLES[self]


ROUTE_TITLES = {
    Route.TOP: "Top",
    Route.NEW: "New",
}


class ListState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class ListingRequest:
    generation: int
    url: str
