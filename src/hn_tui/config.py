from __future__ import annotations

import copy
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
API_BASE = "https://hacker-news.firebaseio.com/v0"
DISCUSSION_URL = "https://news.ycombinator.com/item?id={id}"
HTTP_TIMEOUT = 15
DEFAULT_LIMIT = 30
DEFAULT_MAX_WORKERS = 8
DEFAULT_THEME = "dracula"

CONFIG_PATH = os.path.expanduser("~/.config/hn/config.json")

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:115.0) "
        "Gecko/20100101 Firefox/115.0"
    ),
    "Accept": "application/json",
}

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]t[/] top, [b {color}]n[/] new, "
        "[b {color}]r[/] refresh, [b {color}]ctrl+l[/] toggle nav"
    ),
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "theme": DEFAULT_THEME,
    "limit": DEFAULT_LIMIT,
    "max_workers": DEFAULT_MAX_WORKERS,
    "timeout": HTTP_TIMEOUT,
    "api_base": API_BASE,
    "start_path": "/",
    "ui": UI_DEFAULTS,
}

# --- Logging ---
logger = logging.getLogger("hn")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/hn_debug_{ts}_{pid}.log"

    # Use basicConfig to set up the root logger with a file handler
    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the configuration file on top of the defaults."""
    path = path or CONFIG_PATH
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not os.path.exists(path):
        logger.debug("No config file at %s, using defaults", path)
        return config
    try:
        with open(path, "r") as f:
            user_config = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        return config

    if not isinstance(user_config, dict):
        logger.error("Ignoring config at %s: expected a JSON object", path)
        return config

    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value
    logger.info("Loaded config from %s", path)
    return config


def get_int(config: Dict[str, Any], key: str, minimum: int = 1) -> int:
    """Read an integer setting, falling back to the default when invalid."""
    value = config.get(key, DEFAULT_CONFIG[key])
    try:
        value = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid value for %s: %r, using default", key, value)
        value = DEFAULT_CONFIG[key]
    return max(minimum, value)


def get_float(config: Dict[str, Any], key: str, minimum: float = 0.1) -> float:
    """Read a numeric setting such as a timeout, falling back to the default."""
    value = config.get(key, DEFAULT_CONFIG[key])
    try:
        value = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid value for %s: %r, using default", key, value)
        value = float(DEFAULT_CONFIG[key])
    return max(minimum, value)
