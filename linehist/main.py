"""Click CLI entry point for linehist.

Resolves the history configuration from the environment and command-line
options, then inspects or updates the history file, or hands off to the
REPL.
"""

import dataclasses
import logging
import os
import sys

import click

from . import __version__
from .config import ConfigError, load_config
from .display import console, format_entries
from .repl import run_repl
from .store import HistoryStore


@click.group(invoke_without_command=True)
@click.option(
    "--file",
    "history_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="History file to use (default: $LINEHIST_FILE or ~/.linehist_history).",
)
@click.option(
    "--size",
    default=None,
    type=click.IntRange(min=0),
    help="Maximum number of entries to keep; 0 disables history.",
)
@click.option(
    "--unique/--no-unique",
    default=None,
    help="Drop earlier copies of a line when it is entered again.",
)
@click.option("--debug", is_flag=True, default=False, help="Log debug output to stderr.")
@click.version_option(version=__version__, prog_name="linehist")
@click.pass_context
def cli(
    ctx: click.Context,
    history_file: str | None,
    size: int | None,
    unique: bool | None,
    debug: bool,
) -> None:
    """Shared, de-duplicated line history for interactive prompts.

    Without a command, starts an interactive prompt that records its input
    in the history file.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = load_config()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    overrides = {}
    if history_file is not None:
        overrides["path"] = os.path.expanduser(history_file)
    if size is not None:
        overrides["capacity"] = size
    if unique is not None:
        overrides["unique"] = unique
    ctx.obj = dataclasses.replace(config, **overrides)

    if ctx.invoked_subcommand is None:
        run_repl(ctx.obj)


@cli.command()
@click.pass_obj
def show(config) -> None:
    """List the entries in the history file, oldest first."""
    store = config.create_store()
    if not store.load(config.path):
        console.print(f"[dim]No history at {config.path}[/dim]", highlight=False)
        return
    console.print(format_entries(store.entries), highlight=False)


@cli.command()
@click.argument("lines", nargs=-1, required=True)
@click.pass_obj
def add(config, lines: tuple[str, ...]) -> None:
    """Append LINES to the history file, merging with its contents."""
    store = config.create_store()
    for line in lines:
        store.add(line)

    if not store.save(config.path):
        console.print(f"[red]Error:[/red] cannot write {config.path}", highlight=False)
        sys.exit(1)
    console.print(f"[dim]{len(store)} entries in {config.path}[/dim]", highlight=False)


@cli.command()
@click.argument("prefix")
@click.option("--forward", is_flag=True, default=False, help="Oldest matches first.")
@click.pass_obj
def search(config, prefix: str, forward: bool) -> None:
    """List history entries starting with PREFIX, newest first."""
    store = config.create_store()
    store.load(config.path)

    matches = prefix_matches(store, prefix, backward=not forward)
    if not matches:
        console.print(f"[dim]No entries start with {prefix!r}[/dim]", highlight=False)
        sys.exit(1)
    for line in matches:
        console.print(line, markup=False, highlight=False)


@cli.command()
@click.pass_obj
def repl(config) -> None:
    """Start the interactive prompt."""
    run_repl(config)


def prefix_matches(store: HistoryStore, prefix: str, *, backward: bool = True) -> list[str]:
    """Collect every entry starting with ``prefix`` in search order.

    Repeats the wrap-around prefix search from just outside the newest
    (backward) or oldest (forward) entry until it comes back to a match it
    has already seen.
    """
    store.reset_pos(len(store) if backward else -1)
    seen: set[int] = set()
    order: list[int] = []
    while store.common_prefix_search(prefix, len(prefix), backward):
        if store.cursor in seen:
            break
        seen.add(store.cursor)
        order.append(store.cursor)
    return [store[index] for index in order]
