from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List

from .config import DEFAULT_MAX_WORKERS
from .datamodels import Item
from .errors import FetchError
from .sources.base import Source

logger = logging.getLogger("hn")


class Fetcher:
    """Fetches a listing and its items, keeping the listing's order."""

    def __init__(self, source: Source, max_workers: int = DEFAULT_MAX_WORKERS):
        self.source = source
        self.max_workers = max(1, max_workers)

    def get_listing(self, url: str) -> List[int]:
        try:
            return self.source.get_listing(url)
        except FetchError as e:
            logger.error("Failed to fetch listing: %s", e)
            return []

    def get_stories(self, url: str) -> List[Item]:
        ids = self.get_listing(url)
        if not ids:
            return []

        results: Dict[int, Item] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self.source.get_item, item_id): index
                for index, item_id in enumerate(ids)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except FetchError as e:
                    logger.warning("Skipping item %s: %s", ids[index], e)
                except Exception as e:
                    logger.error("Failed to fetch item %s: %s", ids[index], e)

        stories = [results[index] for index in sorted(results)]
        logger.info("Fetched %d of %d stories from %s", len(stories), len(ids), url)
        return stories
