"""prompt_toolkit history backed by a HistoryStore.

StoreHistory lets a PromptSession read from and append to a HistoryStore,
so the session sees the same de-duplicated, bounded history that is merged
into the shared history file on exit.
"""

from collections.abc import Iterable

from prompt_toolkit.history import History

from .config import HistoryConfig
from .store import HistoryStore


class StoreHistory(History):
    """A prompt_toolkit History whose storage is a HistoryStore.

    Accepting a line that was recalled from history remembers the entry that
    followed it, so pressing "down" once at the next prompt offers that
    entry. This makes re-running a sequence of old commands a matter of
    "up" once, then "down" for each following command.
    """

    def __init__(self, store: HistoryStore) -> None:
        super().__init__()
        self.store = store

    def load_history_strings(self) -> Iterable[str]:
        # Newest first, as prompt_toolkit expects.
        yield from reversed(self.store.entries)

    def store_string(self, string: str) -> None:
        store = self.store
        store.saved_cursor = _following_index(store, string)
        store.add(string)
        store.reset_pos()


def _following_index(store: HistoryStore, accepted: str) -> int | None:
    """Index the entry after the recalled one will have once ``accepted`` is added.

    Eviction during ``add`` is tracked by the store itself; only the removal
    of earlier copies of ``accepted`` is accounted for here.
    """
    if not store.recalling:
        return None
    target = store.cursor + 1
    if not 0 < target < len(store):
        return None
    if store.unique and store[len(store) - 1] != accepted:
        target -= store.entries[:target].count(accepted)
    return target


def get_history(config: HistoryConfig) -> StoreHistory:
    """Return a StoreHistory loaded from the configured history file.

    A missing file yields an empty history.
    """
    store = config.create_store()
    store.load(config.path)
    store.reset_pos()
    return StoreHistory(store)
