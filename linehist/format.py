"""History file format constants and the per-line codec.

The on-disk format is plain UTF-8 text with one entry per line. There is no
header, version marker or escaping: an entry containing a newline is split
into several entries when the file is read back.
"""

# --- Capacity ---

DEFAULT_CAPACITY = 1000

# --- Files ---

ENCODING = "utf-8"
LOCK_SUFFIX = ".lock"

# Owner read/write only, for both the history file and its lock file.
FILE_MODE = 0o600

# Characters that terminate an entry when reading. Anything after the first
# one on a physical line is discarded.
_EOL_CHARS = b"\r\n"


def lock_path_for(path: str) -> str:
    """Return the sibling lock file path used while saving ``path``."""
    return f"{path}{LOCK_SUFFIX}"


def encode_entry(entry: str) -> bytes:
    """Serialize an entry as one newline-terminated UTF-8 line."""
    return entry.encode(ENCODING) + b"\n"


def decode_line(raw: bytes) -> str:
    """Decode one raw line from a history file.

    Truncates at the first CR or LF and decodes the rest as UTF-8, replacing
    invalid byte sequences. Returns an empty string for blank lines, which
    callers skip.
    """
    for index, byte in enumerate(raw):
        if byte in _EOL_CHARS:
            raw = raw[:index]
            break
    return raw.decode(ENCODING, errors="replace")
