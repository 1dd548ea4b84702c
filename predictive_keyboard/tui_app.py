# tui_app.py - keyboard simulator with a live suggestion bar
# -------------------------------------------------------
# Text based terminal UI around DictionaryProvider + TypingSession.
# Features:
#  - every key goes through the same word-boundary logic as a soft keyboard
#  - suggestion bar refreshed on each key, ctrl+1 to ctrl+3 accept a suggestion
#  - loading indicator bound to the provider's is_loading signal
#  - learned words flushed on exit
# -------------------------------------------------------

from __future__ import annotations

import threading
from typing import List, Optional

from rich.markup import escape
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from predictive_keyboard.core.dictionary import DictionaryProvider
from predictive_keyboard.session import BACKSPACE, WORD_BREAK_RE, TypingSession


class SuggestionBar(Static):
    """Up to three suggestions with their shortcut numbers."""

    def show(self, suggestions: List[str]) -> None:
        if not suggestions:
            self.update("[dim]No suggestions[/dim]")
            return
        self.update("   ".join(f"[b]{i}[/b] {escape(w)}" for i, w in enumerate(suggestions, 1)))


class Composer(Static):
    """The text typed so far, with the word in progress highlighted."""

    def show(self, committed: str, current: str) -> None:
        self.update(f"{escape(committed)}[reverse]{escape(current)}[/reverse]▏")


class StatusLine(Static):
    def show(self, loading: bool, size: int) -> None:
        self.update("[yellow]Loading dictionary…[/yellow]" if loading
                    else f"[dim]{size} words[/dim]")


class KeyboardApp(App):
    """
    Architecture:
     - key events to TypingSession
     - TypingSession to reactive state
     - reactive state to widget updates
    """

    BINDINGS = [
        Binding("tab", "pick(1)", "Accept top", priority=True),
        ("ctrl+1", "pick(1)", "Pick 1"),
        ("ctrl+2", "pick(2)", "Pick 2"),
        ("ctrl+3", "pick(3)", "Pick 3"),
        ("ctrl+s", "save", "Save"),
    ]

    suggestions = reactive(list, init=False)
    loading = reactive(True, init=False)

    def __init__(self, provider: DictionaryProvider, limit: Optional[int] = None):
        super().__init__()
        self.provider = provider
        self.session = TypingSession(provider, limit=limit)
        self.committed = ""
        self._unsubscribe = None
        self._ui_thread: Optional[int] = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Composer(id="composer")
        with Horizontal(id="bar"):
            yield SuggestionBar(id="suggestions")
        yield StatusLine(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self._ui_thread = threading.get_ident()
        self._unsubscribe = self.provider.is_loading.subscribe(self._loading_changed)
        if not self.provider.ready:
            self.provider.load_async()
        self._set_loading(self.provider.is_loading.value)
        self.query_one(SuggestionBar).show(self.suggestions)
        self._render_text()

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
        self.provider.close()

    # Key handling ------------------------------------------------------
    def on_key(self, event: events.Key) -> None:
        if event.key == "backspace":
            if not self.session.current_word and self.committed:
                self.committed = self.committed[:-1]
            self.session.process_text(BACKSPACE)
        elif event.is_printable and event.character:
            ch = event.character
            if ch == " " or WORD_BREAK_RE.fullmatch(ch):
                self.committed += self.session.current_word + ch
            self.session.process_text(ch)
        else:
            return
        event.stop()
        self.suggestions = list(self.session.suggestions)
        self._render_text()

    # Actions ------------------------------------------------------
    def action_pick(self, n: int) -> None:
        if not 1 <= n <= len(self.session.suggestions):
            return
        word = self.session.suggestions[n - 1]
        self.committed += word + " "
        self.session.select_suggestion(word)
        self.suggestions = list(self.session.suggestions)
        self._render_text()

    def action_save(self) -> None:
        ok = self.provider.flush()
        self.notify("Saved" if ok else "Save failed", severity="information" if ok else "error")

    # Reactive state ------------------------------------------------------
    def watch_suggestions(self, suggestions: List[str]) -> None:
        self.query_one(SuggestionBar).show(suggestions)

    def watch_loading(self, loading: bool) -> None:
        self.query_one(StatusLine).show(loading, self.provider.dictionary_size.value)

    def _loading_changed(self, value: bool) -> None:
        # the loader flips the flag from its worker thread
        if threading.get_ident() == self._ui_thread:
            self._set_loading(value)
        else:
            self.call_from_thread(self._set_loading, value)

    def _set_loading(self, value: bool) -> None:
        self.loading = value
        self.query_one(StatusLine).show(value, self.provider.dictionary_size.value)

    def _render_text(self) -> None:
        self.query_one(Composer).show(self.committed, self.session.current_word)


def main() -> None:
    from predictive_keyboard.utils.config_manager import Config
    from predictive_keyboard.utils.logger_utils import setup_logging

    cfg = Config()
    setup_logging("WARNING", cfg.data.get("log_file") or None, console=False)
    provider = DictionaryProvider(cfg.resource_paths(), cfg.engine_config())
    KeyboardApp(provider).run()


if __name__ == "__main__":
    main()
