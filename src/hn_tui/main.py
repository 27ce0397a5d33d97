#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys

from textual.theme import BUILTIN_THEMES

from .app import HNApp
from .config import DEFAULT_THEME, load_config, setup_logging

logger = logging.getLogger("hn")


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="Hacker News TUI Client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--theme",
        type=str,
        help=f"Set theme for this run. Available: {', '.join(BUILTIN_THEMES.keys())}",
    )
    parser.add_argument(
        "--route",
        type=str,
        help="Page to open on start: '/' for top stories, '/new' for new stories",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Number of stories to load per listing (default from config)",
    )
    args = parser.parse_args()

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config()
    if args.limit is not None:
        config["limit"] = args.limit
    theme_name = args.theme or config.get("theme") or DEFAULT_THEME

    if theme_name not in BUILTIN_THEMES:
        print(
            f"Theme '{theme_name}' not found, falling back to {DEFAULT_THEME}.",
            file=sys.stderr,
        )
        theme_name = DEFAULT_THEME

    logger.info("Using theme: %s", theme_name)

    try:
        app = HNApp(theme=theme_name, config=config, start_path=args.route)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)


if __name__ == "__main__":
    main()
