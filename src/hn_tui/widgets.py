from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import ListItem, Static
from textual.reactive import reactive
from rich.markup import escape
from rich.text import Text

from .datamodels import Item, Route


def format_age(when: datetime, now: Optional[datetime] = None) -> str:
    """Render a timestamp the way the HN front page does ("3 hours ago")."""
    now = now or datetime.now(timezone.utc)
    seconds = max(0, int((now - when).total_seconds()))
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"


# --- UI Widgets ---
class RouteListItem(ListItem):
    def __init__(self, route: Route):
        super().__init__()
        self.route = route

    def compose(self) -> ComposeResult:
        yield Static(self.route.title)


class StoryItem(ListItem):
    def __init__(self, rank: int, item: Item):
        super().__init__()
        self.rank = rank
        self.item = item

    def compose(self) -> ComposeResult:
        item = self.item
        title = Text(item.title)
        if item.domain:
            title.append(f" ({item.domain})", style="dim")
        meta = (
            f"{item.score} points by {item.by or '?'} {format_age(item.time)}"
            f" | {item.descendants} comments"
        )
        with Horizontal(classes="story-container"):
            yield Static(f"{self.rank}.", classes="story-rank")
            with Vertical(classes="story-body"):
                yield Static(title, classes="story-title")
                yield Static(meta, classes="story-meta")


class StatusBar(Static):
    """One-line footer: the listing status on the left, key hints after it."""

    status = reactive("")
    failed = reactive(False)
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.render_status()

    def set_keybindings(self, hint: str) -> None:
        self.keybinding_hint = hint

    def show_loading(self, title: str) -> None:
        self.failed = False
        self.status = f"Loading {title} stories..."

    def show_count(self, count: int) -> None:
        self.failed = False
        self.status = f"{count} {'story' if count == 1 else 'stories'}"

    def show_error(self, message: str) -> None:
        self.failed = True
        self.status = message

    def render_status(self) -> None:
        parts = []
        if self.status:
            status = escape(self.status)
            parts.append(f"[b $error]{status}[/]" if self.failed else status)
        if self.keybinding_hint:
            parts.append(self.keybinding_hint)
        self.update(" | ".join(parts))

    def watch_status(self) -> None:
        self.render_status()

    def watch_failed(self) -> None:
        self.render_status()

    def watch_keybinding_hint(self) -> None:
        self.render_status()
