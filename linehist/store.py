"""In-memory history of entered lines with a browsing cursor.

The store keeps entries oldest first. Navigation operations only move the
cursor; ``add``, ``clear``, ``set_capacity``, ``load`` and ``save`` change the
entries themselves. The store is not thread-safe: one editor session drives
it from a single thread.
"""

import logging
from collections.abc import Iterator

from .format import DEFAULT_CAPACITY
from .persistence import history_lock, read_history, write_history

logger = logging.getLogger(__name__)


class HistoryError(Exception):
    """Base class for history errors."""


class HistoryIndexError(HistoryError, IndexError):
    """Raised when an entry is requested at a position outside the store."""


class HistoryStore:
    """Bounded, optionally de-duplicated line history.

    Usage::

        store = HistoryStore(capacity=500)
        store.load(path)
        store.add("print(1)")
        store.reset_pos()
        if store.move(up=True):
            line = store[store.cursor]
        store.save(path)

    Attributes:
        cursor: Index of the recalled entry while browsing. Only meaningful
            when the store is non-empty.
        saved_cursor: Position a single "down" move returns to, or None.
            Callers set it; every move, jump and successful prefix search
            clears it.
        recalling: True once a navigation operation succeeded since the last
            ``reset_pos()``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, unique: bool = True) -> None:
        if capacity < 0:
            raise ValueError(f"History capacity must be non-negative, got {capacity}")
        self._entries: list[str] = []
        self._capacity = capacity
        self.unique = unique
        self.cursor = 0
        self.saved_cursor: int | None = None
        self.recalling = False

    # --- Access ---

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> str:
        """Return the entry at ``index``.

        Negative indexes are rejected rather than counted from the end.

        Raises:
            HistoryIndexError: If ``index`` is outside ``[0, len - 1]``.
        """
        if not 0 <= index < len(self._entries):
            raise HistoryIndexError(
                f"History index {index} out of range (size {len(self._entries)})"
            )
        return self._entries[index]

    @property
    def entries(self) -> tuple[str, ...]:
        """Snapshot of the entries, oldest first."""
        return tuple(self._entries)

    @property
    def capacity(self) -> int:
        return self._capacity

    def current(self) -> str | None:
        """Return the entry under the cursor, or None if there is none."""
        try:
            return self[self.cursor]
        except HistoryIndexError:
            return None

    # --- Mutation ---

    def add(self, line: str) -> None:
        """Record a newly entered line.

        Consecutive duplicates are ignored. With ``unique`` set, earlier
        copies of the line are dropped first. Eviction looks at the size
        before the append, so the store may hold ``capacity + 1`` entries.
        Evicting the oldest entry shifts ``saved_cursor`` down by one; if the
        saved entry itself was evicted, the saved position is dropped.
        """
        if self._capacity == 0:
            return
        if self._entries and self._entries[-1] == line:
            return

        if self.unique:
            self._entries = [entry for entry in self._entries if entry != line]

        if len(self._entries) > self._capacity:
            del self._entries[0]
            if self.saved_cursor is not None:
                self.saved_cursor -= 1
                if self.saved_cursor < 0:
                    self.saved_cursor = None

        self._entries.append(line)

    def set_capacity(self, capacity: int) -> None:
        """Change the capacity, dropping the oldest excess entries at once.

        Negative values are ignored.
        """
        if capacity < 0:
            return
        self._capacity = capacity
        excess = len(self._entries) - capacity
        if excess > 0:
            del self._entries[:excess]

    def clear(self) -> None:
        self._entries.clear()
        self.cursor = 0
        self.saved_cursor = None

    # --- Navigation ---

    def reset_pos(self, pos: int | None = None) -> None:
        """Place the cursor at ``pos``, or after browsing when ``pos`` is None.

        With None the cursor goes to the newest entry and recalling stops.
        Any other value is stored unchecked.
        """
        if pos is None:
            self.cursor = len(self._entries) - 1
            self.recalling = False
        else:
            self.cursor = pos

    def move(self, up: bool) -> bool:
        """Step the cursor one entry older (up) or newer (down).

        A "down" move with a saved cursor jumps straight to it instead. The
        saved cursor is consumed either way. Returns False, with the cursor
        clamped to the nearest end, when there is nothing further to move to.
        """
        if self.saved_cursor is not None and not up:
            self.cursor = self.saved_cursor
        else:
            self.cursor += -1 if up else 1
        self.saved_cursor = None

        if self.cursor < 0:
            self.cursor = 0
            return False
        if self.cursor >= len(self._entries):
            self.cursor = len(self._entries) - 1
            return False

        self.recalling = True
        return True

    def jump(self, to_start: bool) -> None:
        """Move the cursor to the oldest (start) or newest entry.

        On an empty store jumping to the end leaves ``cursor == -1``.
        """
        self.cursor = 0 if to_start else len(self._entries) - 1
        self.saved_cursor = None
        self.recalling = True

    def common_prefix_search(self, prefix: str, prefix_length: int, backward: bool) -> bool:
        """Find the next entry starting with ``prefix[:prefix_length]``.

        Scans circularly from one step away from the cursor, towards older
        entries when ``backward`` is set. Returns False, leaving the state
        unchanged, when the scan wraps around without a match or the store is
        empty.
        """
        size = len(self._entries)
        if size == 0:
            return False

        needle = prefix[:prefix_length]
        step = -1 if backward else 1
        for offset in range(1, size + 1):
            index = (self.cursor + offset * step) % size
            if index == self.cursor:
                break
            if self._entries[index].startswith(needle):
                self.cursor = index
                self.saved_cursor = None
                self.recalling = True
                return True
        return False

    # --- Persistence ---

    def load(self, path: str) -> bool:
        """Add every non-empty line of ``path`` to the store.

        Loaded lines go through ``add``, so capacity and de-duplication apply.
        Returns False if the file could not be read, which is not an error.
        """
        lines = read_history(path)
        if lines is None:
            return False
        for line in lines:
            self.add(line)
        return True

    def save(self, path: str) -> bool:
        """Merge with the file at ``path`` and rewrite it.

        Under the file's lock, the current file contents are loaded into the
        emptied store and this session's entries are re-added after them, so
        concurrent sessions do not overwrite each other. The in-memory store
        keeps the merged result even if writing fails. Returns True when the
        file was written.
        """
        with history_lock(path):
            session_entries = self._entries
            self._entries = []
            self.load(path)
            for line in session_entries:
                self.add(line)
            written = write_history(path, self._entries)

        if written:
            logger.debug("Saved %d history entries to %s", len(self._entries), path)
        return written
