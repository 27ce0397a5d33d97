from __future__ import annotations

import logging
import webbrowser
from functools import partial
from typing import Any, List, Optional, Tuple

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.worker import Worker, WorkerState
from textual.widgets import (
    Header,
    ListView,
    Static,
    LoadingIndicator,
    Rule,
)

from .config import DEFAULT_CONFIG, DEFAULT_THEME, UI_DEFAULTS, get_int
from .datamodels import Item, ListingRequest, Route
from .fetcher import Fetcher
from .listing import ListingTracker
from .routes import listing_url, resolve_route
from .screens import StoryViewScreen
from .sources.base import Source
from .sources.hackernews import HackerNewsSource
from .widgets import RouteListItem, StatusBar, StoryItem

logger = logging.getLogger("hn")


class HNApp(App):
    TITLE = "Hacker News"
    SUB_TITLE = "Top stories"

    CSS_PATH = "app.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("t", "navigate('/')", "Top"),
        Binding("n", "navigate('/new')", "New"),
        Binding("o", "open_in_browser", "Open link"),
        Binding("left", "nav_left", "Navigate Left"),
        Binding("right", "nav_right", "Navigate Right"),
        Binding("ctrl+l", "toggle_left_pane", "Toggle Navigation"),
    ]

    def __init__(
        self,
        theme: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
        source: Optional[Source] = None,
        start_path: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.config = config or dict(DEFAULT_CONFIG)
        self._theme_name = theme or self.config.get("theme") or DEFAULT_THEME
        self.source = source or HackerNewsSource(self.config)
        self.fetcher = Fetcher(self.source, max_workers=get_int(self.config, "max_workers"))
        self.api_base = self.config.get("api_base", DEFAULT_CONFIG["api_base"])
        self.start_path = start_path or self.config.get("start_path") or Route.TOP.value
        self.listing = ListingTracker()
        self.current_route: Optional[Route] = None
        self._stories_worker: Optional[Worker] = None
        self._stories_request: Optional[ListingRequest] = None

    @property
    def theme_name(self) -> str:
        return self._theme_name

    @property
    def stories(self) -> List[Item]:
        return self.listing.items

    def get_keybinding_style(self) -> str:
        return "$accent"

    def compose(self) -> ComposeResult:
        yield Header()
        # Main horizontal split: left = navigation, right = stories
        with Horizontal(id="main"):
            with Vertical(id="left"):
                yield Static("Stories", classes="pane-title")
                yield ListView(
                    *(RouteListItem(route) for route in Route), id="nav-list"
                )
            yield Rule(orientation="vertical")
            with Vertical(id="right"):
                yield Static("Top", id="stories-title", classes="pane-title")
                yield LoadingIndicator(id="stories-loading")
                yield Static(id="stories-message")
                yield ListView(id="stories-list")
        yield StatusBar()

    def on_mount(self) -> None:
        self.theme = self._theme_name
        self.query_one("#stories-loading", LoadingIndicator).display = False
        self.query_one("#stories-message").display = False

        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.query_one(StatusBar).set_keybindings(
            keybindings_text.format(color=self.get_keybinding_style())
        )

        if not self.navigate(self.start_path):
            self.navigate(Route.TOP.value)
        self.query_one("#stories-list").focus()

    # --- Routing ---
    def navigate(self, path: str) -> bool:
        """Switch to the route for a path. Unknown paths leave the view as is."""
        route = resolve_route(path)
        if route is None:
            logger.warning("Ignoring navigation to unknown path %r", path)
            self.notify(f"Unknown page: {path}", severity="warning")
            return False

        self.current_route = route
        self.sub_title = f"{route.title} stories"
        self.query_one("#stories-title", Static).update(route.title)
        nav = self.query_one("#nav-list", ListView)
        index = list(Route).index(route)
        if nav.index != index:
            nav.index = index
        self._load_listing(listing_url(route, self.api_base))
        return True

    def action_navigate(self, path: str) -> None:
        self.navigate(path)

    # --- Loading ---
    def _load_listing(self, url: str) -> None:
        request = self.listing.begin(url)
        self._stories_request = request
        title = self.current_route.title if self.current_route else url
        self.query_one(StatusBar).show_loading(title)
        self.query_one("#stories-list", ListView).clear()
        self.query_one("#stories-message").display = False
        self.query_one("#stories-loading", LoadingIndicator).display = True
        self._stories_worker = self.run_worker(
            partial(self._fetch_stories, request),
            name="stories_loader",
            group="stories",
            thread=True,
            exit_on_error=False,
        )

    def _fetch_stories(self, request: ListingRequest) -> Tuple[ListingRequest, List[Item]]:
        return request, self.fetcher.get_stories(request.url)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if getattr(event.worker, "name", None) != "stories_loader":
            return
        if event.state is WorkerState.SUCCESS:
            request, items = event.worker.result
            if self.listing.complete(request, items):
                self._show_stories()
        elif event.state is WorkerState.ERROR:
            self._handle_stories_error(event)

    def _handle_stories_error(self, event: Worker.StateChanged) -> None:
        if event.worker is not self._stories_worker or self._stories_request is None:
            logger.debug("Ignoring failure of a superseded stories worker")
            return
        error = getattr(event.worker, "error", None)
        logger.error("Stories worker failed: %s", error)
        if not self.listing.complete(self._stories_request, []):
            return
        self.query_one("#stories-loading", LoadingIndicator).display = False
        self.query_one("#stories-list", ListView).clear()
        self.query_one(StatusBar).show_error(f"Error loading stories: {error}")
        message = self.query_one("#stories-message", Static)
        message.update(Text(f"Failed to load stories: {error}", style="bold red"))
        message.display = True

    def _show_stories(self) -> None:
        self.query_one(StatusBar).show_count(len(self.stories))
        self.query_one("#stories-loading", LoadingIndicator).display = False
        stories_list = self.query_one("#stories-list", ListView)
        stories_list.clear()

        message = self.query_one("#stories-message", Static)
        if not self.stories:
            message.update(Text("No stories.", style="dim"))
            message.display = True
            return

        message.display = False
        stories_list.extend(
            StoryItem(rank, item) for rank, item in enumerate(self.stories, start=1)
        )
        stories_list.index = 0

    # --- Actions ---
    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.list_view.id == "nav-list":
            if isinstance(event.item, RouteListItem):
                self.navigate(event.item.route.value)
        elif event.list_view.id == "stories-list":
            if isinstance(event.item, StoryItem):
                self.push_screen(StoryViewScreen(event.item.item))

    def _highlighted_story(self) -> Optional[Item]:
        item = self.query_one("#stories-list", ListView).highlighted_child
        if isinstance(item, StoryItem):
            return item.item
        return None

    def action_refresh(self) -> None:
        if self.current_route:
            self._load_listing(listing_url(self.current_route, self.api_base))

    def action_open_in_browser(self) -> None:
        story = self._highlighted_story()
        if story:
            webbrowser.open(story.link)

    def action_nav_left(self) -> None:
        if self.query_one("#stories-list").has_focus:
            self.query_one("#nav-list").focus()

    def action_nav_right(self) -> None:
        stories_list = self.query_one("#stories-list", ListView)
        if stories_list.has_focus:
            story = self._highlighted_story()
            if story:
                self.push_screen(StoryViewScreen(story))
        elif self.query_one("#nav-list").has_focus:
            stories_list.focus()

    def action_toggle_left_pane(self) -> None:
        left_pane = self.query_one("#left")
        left_pane.display = not left_pane.display
