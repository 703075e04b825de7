"""The menu application: filter as you type, confirm with Enter."""

import os
from typing import Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, Label, Static

from goto_core import paths
from goto_core.store import CommandEntry
from goto_core.tui.entry_list import EntryList, render_details
from goto_core.tui.state import MenuState

_log = paths.configure_logger("goto.tui")

MENU_LABEL = "Select an environment to go"


class UserCancellation(Exception):
    """Raised when the user aborts the menu without choosing."""


class MenuError(Exception):
    """Raised when the menu exits abnormally without a choice."""


class MenuApp(App[int]):
    """Single-screen selection menu.  Exits with the chosen entry's index
    into the unfiltered entry list, or ``None`` when cancelled."""

    CSS = """
    #menu-label {
        text-style: bold;
        padding: 0 1;
    }
    #search {
        border: none;
        height: 1;
        padding: 0 1;
    }
    #details {
        height: auto;
        padding: 0 1;
    }
    .menu-hint {
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("pageup", "page_up", "Page up", show=False, priority=True),
        Binding("pagedown", "page_down", "Page down", show=False, priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+c", "cancel", "Cancel", priority=True),
        Binding("enter", "select", "Select"),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("slash", "start_search", "Search", show=False),
    ]

    def __init__(self, entries: Sequence[CommandEntry], start_in_search_mode: bool = False):
        super().__init__()
        self._entries = list(entries)
        self._state = MenuState([e.name for e in self._entries])
        self._searching = start_in_search_mode

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def searching(self) -> bool:
        return self._searching

    def compose(self) -> ComposeResult:
        yield Label(MENU_LABEL, id="menu-label")
        yield Input(placeholder="Search...", id="search")
        yield EntryList(self._entries, self._state, id="entries")
        yield Static("", id="details")
        yield Label("[dim]↑↓ navigate  / search  Enter select  Esc cancel[/]",
                    classes="menu-hint")

    def on_mount(self) -> None:
        search = self.query_one("#search", Input)
        if self._searching:
            search.focus()
        else:
            search.display = False
            self.query_one("#entries", EntryList).focus()
        self._refresh()

    def _refresh(self) -> None:
        self.query_one("#entries", EntryList).refresh(layout=True)
        idx = self._state.selected_index
        entry = self._entries[idx] if idx is not None else None
        self.query_one("#details", Static).update(render_details(entry))

    def on_input_changed(self, event: Input.Changed) -> None:
        _log.debug("query=%r", event.value)
        self._state.set_query(event.value)
        self._refresh()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_select()

    def action_cursor_up(self) -> None:
        self._state.move(-1)
        self._refresh()

    def action_cursor_down(self) -> None:
        self._state.move(1)
        self._refresh()

    def action_page_up(self) -> None:
        self._state.move(-self._state.page_size)
        self._refresh()

    def action_page_down(self) -> None:
        self._state.move(self._state.page_size)
        self._refresh()

    def action_start_search(self) -> None:
        if self._searching:
            return
        self._searching = True
        search = self.query_one("#search", Input)
        search.display = True
        search.focus()

    def action_select(self) -> None:
        idx = self._state.selected_index
        if idx is None:
            return
        _log.info("Selected %r (index %d)", self._entries[idx].name, idx)
        self.exit(idx)

    def action_cancel(self) -> None:
        _log.info("Menu cancelled")
        self.exit(None)


def select(entries: Sequence[CommandEntry], start_in_search_mode: bool = False) -> int:
    """Show the menu and return the chosen entry's index.

    Raises:
        UserCancellation: the user pressed Esc or Ctrl-C.
        MenuError: the menu crashed.
    """
    app = MenuApp(entries, start_in_search_mode)
    # Inline rendering keeps the shell scrollback, where supported.
    result = app.run(inline=os.name != "nt")
    if result is None:
        if app.return_code:
            _log.warning("Menu exited with code %s", app.return_code)
            raise MenuError(f"menu exited abnormally (code {app.return_code})")
        raise UserCancellation()
    return result
