"""Reading, writing and locking history files.

Several processes may share one history file. Writers serialize the whole
read-merge-write sequence through an advisory lock on a sibling ``.lock``
file; readers take no lock.
"""

import fcntl
import logging
import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from .format import FILE_MODE, decode_line, encode_entry, lock_path_for

logger = logging.getLogger(__name__)


@contextmanager
def history_lock(path: str) -> Iterator[bool]:
    """Hold the exclusive save lock for ``path`` for the duration of the block.

    Blocks until the lock is available; there is no timeout. The lock file is
    removed and unlocked on every exit path. Yields True when the lock was
    taken, False when the lock file could not be created or locked, in which
    case the block runs unlocked.
    """
    lock_path = lock_path_for(path)
    while True:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_RDWR, FILE_MODE)
        except OSError as exc:
            logger.warning("Cannot create lock file %s: %s", lock_path, exc)
            yield False
            return

        try:
            fcntl.lockf(fd, fcntl.LOCK_EX)
        except OSError as exc:
            locked = False
            logger.warning("Cannot lock %s: %s", lock_path, exc)
            break

        if _is_current(fd, lock_path):
            locked = True
            logger.debug("Acquired history lock %s", lock_path)
            break
        # The previous holder removed the file while we waited on it.
        os.close(fd)

    try:
        yield locked
    finally:
        try:
            try:
                os.unlink(lock_path)
            except OSError:
                pass
            if locked:
                fcntl.lockf(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)
        logger.debug("Released history lock %s", lock_path)


def _is_current(fd: int, lock_path: str) -> bool:
    """Return True if ``fd`` is still the file found at ``lock_path``."""
    try:
        on_disk = os.stat(lock_path)
    except OSError:
        return False
    held = os.fstat(fd)
    return (held.st_dev, held.st_ino) == (on_disk.st_dev, on_disk.st_ino)


def read_history(path: str) -> list[str] | None:
    """Return the non-empty entries stored in ``path``.

    Returns None when the file cannot be opened, which callers treat as
    "no history yet".
    """
    try:
        with open(path, "rb") as fh:
            entries = [line for line in map(decode_line, fh) if line]
    except OSError as exc:
        logger.debug("No history read from %s: %s", path, exc)
        return None

    logger.debug("Read %d history entries from %s", len(entries), path)
    return entries


def write_history(path: str, entries: Iterable[str]) -> bool:
    """Truncate ``path`` and write one line per non-empty entry.

    The file is created (or reset) with owner-only permissions. Returns
    False without raising when the file cannot be opened or written.
    """
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    except OSError as exc:
        logger.warning("Cannot open history file %s for writing: %s", path, exc)
        return False

    count = 0
    try:
        with os.fdopen(fd, "wb") as fh:
            os.chmod(path, FILE_MODE)
            for entry in entries:
                if entry:
                    fh.write(encode_entry(entry))
                    count += 1
    except OSError as exc:
        logger.warning("Failed writing history file %s: %s", path, exc)
        return False

    logger.debug("Wrote %d history entries to %s", count, path)
    return True
