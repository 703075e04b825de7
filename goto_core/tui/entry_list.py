"""Entry list widget for the menu."""

from typing import Sequence

from rich.console import RenderableType
from rich.text import Text
from textual.widget import Widget

from goto_core.colors import colorize, faint, underline
from goto_core.store import CommandEntry
from goto_core.tui.state import MenuState

ICON_SELECT = "▸"


def render_row(entry: CommandEntry, active: bool) -> Text:
    """One menu row: the colored name, underlined and marked when active."""
    if active:
        line = f"{ICON_SELECT} {colorize(entry.color, underline(entry.name))}"
    else:
        line = f"  {colorize(entry.color, entry.name)}"
    return Text.from_ansi(line)


def render_details(entry: CommandEntry | None) -> Text:
    """Faint description of the highlighted entry (empty when it has none)."""
    if entry is None or not entry.desc:
        return Text()
    return Text.from_ansi(faint(entry.desc))


class EntryList(Widget):
    """Page of entries left visible by the current query."""

    can_focus = True

    DEFAULT_CSS = """
    EntryList {
        height: auto;
        padding: 0 1;
    }
    """

    def __init__(self, entries: Sequence[CommandEntry], state: MenuState, **kwargs):
        super().__init__(**kwargs)
        self._entries = list(entries)
        self._state = state

    def render(self) -> RenderableType:
        rows = self._state.page()
        if not rows:
            return Text("No matches", style="dim")
        output = Text()
        for n, (idx, active) in enumerate(rows):
            if n:
                output.append("\n")
            output.append_text(render_row(self._entries[idx], active))
        return output
