"""Interactive prompt wired to the shared history file.

Reads lines with prompt_toolkit using StoreHistory and the history key
bindings, echoes them back, and merges the session's history into the
history file on exit. Dot-commands inspect and manage the history.
"""

import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from rich.markup import escape

from .config import HistoryConfig
from .display import console, format_entries
from .history import get_history
from .navigator import HistoryNavigator, build_key_bindings
from .store import HistoryStore

logger = logging.getLogger(__name__)

# Sentinel return value for the REPL loop
QUIT = object()

DOT_HELP = {
    "history": "List the history, oldest first",
    "clear": "Forget this session's history (the file is merged on exit)",
    "help": "Show this help",
    "quit": "Save history and exit",
}

PROMPT = HTML("<style fg='ansigray'>[history]</style> <b>&gt;</b> ")


def run_repl(config: HistoryConfig) -> None:
    """Run the interactive loop until Ctrl-D or ``.quit``.

    Args:
        config: Location and limits of the history to use.
    """
    history = get_history(config)
    store = history.store
    navigator = HistoryNavigator(store)
    session: PromptSession = PromptSession(
        history=history,
        key_bindings=build_key_bindings(navigator),
    )

    try:
        while True:
            try:
                line = session.prompt(PROMPT)
            except EOFError:
                console.print("\nGoodbye")
                break
            except KeyboardInterrupt:
                navigator.reset()
                continue

            trimmed = line.strip()
            if not trimmed:
                continue

            if trimmed.startswith("."):
                result = handle_dot_command(trimmed, store)
                if result is QUIT:
                    console.print("Goodbye")
                    break
                if isinstance(result, str):
                    console.print(result, highlight=False)
                continue

            console.print(line, markup=False, highlight=False)
    finally:
        # With history disabled a save would only empty the shared file.
        if store.capacity and not store.save(config.path):
            logger.warning("History was not saved to %s", config.path)


def handle_dot_command(line: str, store: HistoryStore) -> str | object | None:
    """Handle a dot-command (line starting with '.').

    Returns:
        - A string (Rich markup) to display.
        - QUIT to signal the REPL should exit.
        - None for no output.
    """
    parts = line.strip().split(None, 1)
    cmd = parts[0][1:].lower() if parts else ""

    match cmd:
        case "history":
            return format_entries(store.entries)
        case "clear":
            store.clear()
            return "History cleared"
        case "help":
            return "\n".join(f"[bold].{name}[/bold]  {text}" for name, text in DOT_HELP.items())
        case "quit" | "exit":
            return QUIT
        case _:
            return f"[red]Unknown command:[/red] .{escape(cmd)}"
