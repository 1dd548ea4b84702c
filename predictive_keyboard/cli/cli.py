"""
cli.py - command line front end for the predictive keyboard engine
Features:
- Interactive typing loop: text is fed to a TypingSession one key at a time,
  the suggestion bar is printed after every line
- /pick N accepts a suggestion (learned like a keyboard tap)
- Loading runs in the background; the prompt is usable immediately
- Uses Rich for tables and formatting
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# ui styling with Rich
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from predictive_keyboard.core.dictionary import DictionaryProvider
from predictive_keyboard.core.loader import write_resource
from predictive_keyboard.session import TypingSession
from predictive_keyboard.utils.config_manager import Config
from predictive_keyboard.utils.logger_utils import setup_logging

logger = logging.getLogger(__name__)

# initialise console for rich output
console = Console()

HELP = "Commands: /pick N  /clear  /stats  /learned  /save  /quit"


class CLI:
    """Interactive loop around one DictionaryProvider + TypingSession."""

    def __init__(self, provider: DictionaryProvider, limit: Optional[int] = None):
        self.provider = provider
        self.session = TypingSession(provider, limit=limit)
        self.running = True

    def run(self):
        """
        Main interactive loop:
        - Prompts for text; each line is typed into the session as-is
          (end a line with a space to complete the word)
        - Handles slash commands
        """
        console.rule("[bold magenta]Predictive Keyboard[/bold magenta]")
        console.print(f"[cyan]{HELP}[/cyan]\n")
        self.provider.is_loading.subscribe(self._on_loading_changed)
        self.provider.load_async()

        while self.running:
            try:
                line = console.input("[green]>[/green] ")
            except (EOFError, KeyboardInterrupt):
                self._exit()
                break
            if line.startswith("/"):
                self.handle_command(line.strip())
                continue
            self.session.type_text(line)
            self._display()

    # COMMAND HANDLING -----------------------------------------------------------
    def handle_command(self, cmd: str):
        name, _, arg = cmd.partition(" ")
        if name == "/quit":
            self._exit()
        elif name == "/pick":
            self._pick(arg.strip())
        elif name == "/clear":
            self.session.reset_current_word()
            console.print("[yellow]Current word cleared.[/yellow]")
        elif name == "/stats":
            self._show_stats()
        elif name == "/learned":
            self._show_learned()
        elif name == "/save":
            ok = self.provider.flush()
            console.print("[green]Saved.[/green]" if ok else "[red]Save failed, see log.[/red]")
        else:
            console.print(f"[red]Unknown command:[/red] {cmd}")

    def _pick(self, arg: str):
        suggestions = self.session.suggestions
        if not arg.isdigit() or not 1 <= int(arg) <= len(suggestions):
            console.print("[red]Pick a number from the suggestion bar.[/red]")
            return
        word = suggestions[int(arg) - 1]
        console.print(f"[green]Accepted:[/green] {escape(word)}")
        self.session.select_suggestion(word)
        self._display()

    # DISPLAY -------------------------------------------------------------------
    def _display(self):
        """Current word + the suggestion bar."""
        suggestions = self.session.suggestions
        if not suggestions:
            status = "loading…" if self.provider.is_loading.value else "(no suggestions)"
            console.print(f"[dim]{status}[/dim]")
            return
        table = Table(box=box.SIMPLE, show_edge=False, show_header=False)
        for _ in suggestions:
            table.add_column()
        table.add_row(*[f"[cyan]{i}[/cyan] [{self._style(w)}]{escape(w)}[/]"
                        for i, w in enumerate(suggestions, 1)])
        context = escape(" ".join(self.session.previous_words)) or "-"
        console.print(f"[dim]context:[/dim] {context}   [dim]typing:[/dim] {escape(self.session.current_word) or '-'}")
        console.print(table)

    def _style(self, word: str) -> str:
        # green for words the user taught us
        return "green" if self.provider.overlay.word_frequency(word) else "bold"

    def _show_stats(self):
        table = Table(title="Engine", box=box.MINIMAL)
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        for k, v in self.provider.stats().items():
            table.add_row(k, str(v))
        report = self.provider.report
        if report is not None:
            table.add_row("load_ms", f"{report.elapsed_ms:.1f}")
            table.add_row("skipped_records", str(report.skipped))
            for err in report.errors:
                table.add_row("error", f"{type(err).__name__}: {err}")
        console.print(table)

    def _show_learned(self):
        table = Table(title="Learned Words", box=box.MINIMAL)
        table.add_column("Word")
        table.add_column("Freq", justify="right")
        for w, c in self.provider.overlay.most_common(20):
            table.add_row(escape(w), str(c))
        console.print(table)

    def _on_loading_changed(self, loading: bool):
        if not loading:
            stats = self.provider.stats()
            console.print(Panel(f"{stats['dictionary_size']} words ({stats['source']})",
                                title="Dictionary ready", border_style="cyan"))

    # EXIT ------------------------------------------------------------------------
    def _exit(self):
        """Exit cleanly, flushing learned words."""
        console.rule("[red]Exiting[/red]")
        self.provider.close()
        self.running = False


# Entry point ---------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="predictive-keyboard",
                                     description="Predictive text engine playground")
    parser.add_argument("--config", default="keyboard_config.json", help="JSON config file")
    parser.add_argument("--data-dir", help="override data_dir from the config")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--limit", type=int, help="suggestions per query")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("run", help="interactive typing loop (default)")

    p = sub.add_parser("suggest", help="one-shot suggestions")
    p.add_argument("prefix", help="word being typed (may be empty)")
    p.add_argument("--after", nargs="*", default=[], help="previously completed words")

    p = sub.add_parser("pack", help="gzip a plain 'word,freq' text file into a resource")
    p.add_argument("source", type=Path)
    p.add_argument("dest", type=Path)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    if args.data_dir:
        cfg.data["data_dir"] = args.data_dir
    setup_logging(args.log_level, cfg.data.get("log_file") or None)

    if args.command == "pack":
        with open(args.source, "r", encoding="utf-8") as fh:
            lines = [ln for ln in fh if ln.strip()]
        write_resource(args.dest, lines)
        console.print(f"[green]Wrote {len(lines)} records to {args.dest}[/green]")
        return 0

    provider = DictionaryProvider(cfg.resource_paths(), cfg.engine_config())

    if args.command == "suggest":
        provider.load()
        words = provider.get_contextual_suggestions(args.after, args.prefix, args.limit)
        console.print(" ".join(words) if words else "[dim](no suggestions)[/dim]")
        provider.close()
        return 0

    CLI(provider, limit=args.limit).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
