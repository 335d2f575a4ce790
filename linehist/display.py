"""Rich formatting for history listings."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

console = Console()


def format_entries(entries: Sequence[str], cursor: int | None = None) -> str:
    """Format entries as a numbered listing in Rich markup.

    Numbers start at 1 for the oldest entry. The entry at index ``cursor``,
    if any, is highlighted.
    """
    if not entries:
        return "[dim](empty)[/dim]"

    width = len(str(len(entries)))
    lines = []
    for index, entry in enumerate(entries):
        number = f"{index + 1:>{width}}"
        if index == cursor:
            lines.append(f"[bold yellow]{number}  {escape(entry)}[/bold yellow]")
        else:
            lines.append(f"[dim]{number}[/dim]  {escape(entry)}")
    return "\n".join(lines)
