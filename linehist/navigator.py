"""Key-driven history browsing for a prompt_toolkit Buffer.

HistoryNavigator translates editing keys into HistoryStore cursor
operations and shows the recalled entry in the buffer. While not browsing,
the store cursor sits one past the newest entry, so the first "up" lands on
the newest entry.
"""

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent

from .store import HistoryStore


class HistoryNavigator:
    """Browse a HistoryStore from a prompt_toolkit Buffer.

    The text being edited when browsing starts is kept as a draft and put
    back when moving down past the newest entry.
    """

    def __init__(self, store: HistoryStore) -> None:
        self.store = store
        self.draft = ""

    def reset(self) -> None:
        """Stop browsing, e.g. after the current input was cancelled."""
        self.store.reset_pos()
        self.draft = ""

    def previous(self, buffer: Buffer) -> bool:
        """Show the next older entry. Returns False at the oldest entry."""
        self._begin(buffer)
        if not self.store.move(up=True):
            return False
        self._show(buffer, self.store[self.store.cursor])
        return True

    def next(self, buffer: Buffer) -> bool:
        """Show the next newer entry, or the draft after the newest one.

        When not browsing, this only does something if a saved cursor was
        left by the previous prompt.
        """
        store = self.store
        if not store.recalling:
            if store.saved_cursor is None:
                return False
            self.draft = buffer.text

        if store.move(up=False):
            self._show(buffer, store[store.cursor])
            return True

        if not store.recalling:
            return False
        store.reset_pos()
        self._show(buffer, self.draft)
        return True

    def first(self, buffer: Buffer) -> bool:
        return self._jump(buffer, to_start=True)

    def last(self, buffer: Buffer) -> bool:
        return self._jump(buffer, to_start=False)

    def search(self, buffer: Buffer, backward: bool) -> bool:
        """Show the next entry starting with the text before the cursor.

        The search wraps around; the buffer cursor stays at the end of the
        prefix so repeated searches use the same prefix.
        """
        if not len(self.store):
            return False
        prefix = buffer.document.text_before_cursor
        self._begin(buffer, backward=backward)
        if not self.store.common_prefix_search(prefix, len(prefix), backward):
            return False
        self._show(buffer, self.store[self.store.cursor], cursor_position=len(prefix))
        return True

    def _begin(self, buffer: Buffer, *, backward: bool = True) -> None:
        # Park the cursor just outside the entries on the side the scan
        # starts from, so the first step lands on the newest or oldest one.
        if not self.store.recalling:
            self.draft = buffer.text
            self.store.reset_pos(len(self.store) if backward else -1)

    def _jump(self, buffer: Buffer, *, to_start: bool) -> bool:
        if not len(self.store):
            return False
        if not self.store.recalling:
            self.draft = buffer.text
        self.store.jump(to_start)
        self._show(buffer, self.store[self.store.cursor])
        return True

    @staticmethod
    def _show(buffer: Buffer, text: str, cursor_position: int | None = None) -> None:
        if cursor_position is None:
            cursor_position = len(text)
        buffer.document = Document(text, cursor_position=min(cursor_position, len(text)))


def build_key_bindings(navigator: HistoryNavigator) -> KeyBindings:
    """Bind history keys for ``navigator``.

    Up/Down step through history, Escape-< and Escape-> go to the oldest and
    newest entries, and Escape-p / Escape-n search backward / forward for
    entries starting with the text before the cursor.
    """
    bindings = KeyBindings()

    @bindings.add("up")
    def _previous(event: KeyPressEvent) -> None:
        navigator.previous(event.current_buffer)

    @bindings.add("down")
    def _next(event: KeyPressEvent) -> None:
        navigator.next(event.current_buffer)

    @bindings.add("escape", "<")
    def _first(event: KeyPressEvent) -> None:
        navigator.first(event.current_buffer)

    @bindings.add("escape", ">")
    def _last(event: KeyPressEvent) -> None:
        navigator.last(event.current_buffer)

    @bindings.add("escape", "p")
    def _search_backward(event: KeyPressEvent) -> None:
        navigator.search(event.current_buffer, backward=True)

    @bindings.add("escape", "n")
    def _search_forward(event: KeyPressEvent) -> None:
        navigator.search(event.current_buffer, backward=False)

    return bindings
