from __future__ import annotations

import webbrowser

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Header, Markdown

from .datamodels import Item
from .widgets import StatusBar, format_age


def story_markdown(item: Item) -> str:
    """Render an item's details as Markdown."""
    parts = [f"# {item.title}\n"]
    if item.url:
        parts.append(f"<{item.url}>\n")
    parts.append(
        f"**{item.score}** points by **{item.by or '?'}** "
        f"{format_age(item.time)} ({item.time:%Y-%m-%d %H:%M} UTC)\n"
    )
    parts.append(f"[{item.descendants} comments]({item.discussion_url})\n")
    if item.text:
        parts.append("---\n")
        parts.append(item.text)
    return "\n".join(parts)


class StoryViewScreen(Screen):
    BINDINGS = [
        Binding("escape,q,left", "app.pop_screen", "Back"),
        Binding("o", "open_in_browser", "Open link"),
        Binding("c", "open_discussion", "Open comments"),
        Binding("down", "scroll_down", "Scroll Down"),
        Binding("up", "scroll_up", "Scroll Up"),
    ]

    def __init__(self, item: Item):
        super().__init__()
        self.item = item

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(
            Markdown(story_markdown(self.item), id="story-markdown"),
            id="story-scroll",
        )
        yield StatusBar()

    def on_mount(self) -> None:
        self.title = self.item.title
        self.sub_title = self.item.domain or "news.ycombinator.com"
        self.query_one("#story-scroll").focus()

        keybinding_style = self.app.get_keybinding_style()
        self.query_one(StatusBar).set_keybindings(
            f"[b {keybinding_style}]o[/] to open, "
            f"[b {keybinding_style}]c[/] for comments, "
            f"[b {keybinding_style}]esc[/] to go back"
        )

    def action_open_in_browser(self) -> None:
        webbrowser.open(self.item.link)

    def action_open_discussion(self) -> None:
        webbrowser.open(self.item.discussion_url)

    def action_scroll_down(self) -> None:
        self.query_one("#story-scroll").scroll_down()

    def action_scroll_up(self) -> None:
        self.query_one("#story-scroll").scroll_up()
