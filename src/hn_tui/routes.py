from __future__ import annotations

import logging
from typing import Optional

from .config import API_BASE
from .datamodels import Route

logger = logging.getLogger("hn")

LISTING_ENDPOINTS = {
    Route.TOP: "topstories.json",
    Route.NEW: "newstories.json",
}


def resolve_route(path: str) -> Optional[Route]:
    """Return the route for a path, or None when nothing matches.

    "/" only matches exactly. "/new" also matches anything below it, so
    "/new/" and "/new/2" still show the newest stories.
    """
    if not isinstance(path, str):
        return None
    path = path.strip()
    if path == Route.TOP.value:
        return Route.TOP
    if path == Route.NEW.value or path.startswith(Route.NEW.value + "/"):
        return Route.NEW
    logger.debug("No route for path %r", path)
    return None


def listing_url(route: Route, api_base: str = API_BASE) -> str:
    return f"{api_base.rstrip('/')}/{LISTING_ENDPOINTS[route]}"
