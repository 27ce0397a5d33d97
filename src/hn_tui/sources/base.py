from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..datamodels import Item


class Source(ABC):
    """Abstract base class for a story source."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    @abstractmethod
    def get_listing(self, url: str) -> List[int]:
        """Return the ranked item ids behind a listing URL."""
        pass

    @abstractmethod
    def get_item(self, item_id: int) -> Item:
        """Return the details of a single item."""
        pass
