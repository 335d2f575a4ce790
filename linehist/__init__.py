"""linehist: interactive line history for line-editing prompts.

Keeps previously entered lines, lets an editor browse them with arrow keys
and prefix search, and persists them to a history file that several
processes can share:

    PromptSession (prompt_toolkit)
        |  StoreHistory / HistoryNavigator
        v
    HistoryStore  --save: lock, merge, rewrite-->  ~/.linehist_history
"""

from .store import HistoryError, HistoryIndexError, HistoryStore

__version__ = "0.1.0"

__all__ = ["HistoryError", "HistoryIndexError", "HistoryStore", "__version__"]
