"""History settings from the environment.

Settings default to a history file in the home directory holding up to
DEFAULT_CAPACITY unique entries. Each can be overridden through an
environment variable, and the command line overrides those in turn.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .format import DEFAULT_CAPACITY
from .store import HistoryError, HistoryStore

DEFAULT_HISTORY_PATH = os.path.expanduser("~/.linehist_history")

ENV_FILE = "LINEHIST_FILE"
ENV_SIZE = "LINEHIST_SIZE"
ENV_UNIQUE = "LINEHIST_UNIQUE"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(HistoryError, ValueError):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Where history lives and how much of it to keep.

    Attributes:
        path: History file shared by all sessions.
        capacity: Maximum number of entries kept (0 disables history).
        unique: Drop earlier copies of a line when it is entered again.
    """

    path: str = DEFAULT_HISTORY_PATH
    capacity: int = DEFAULT_CAPACITY
    unique: bool = True

    def create_store(self) -> HistoryStore:
        """Return an empty store with these settings."""
        return HistoryStore(capacity=self.capacity, unique=self.unique)


def parse_bool(value: str, *, name: str) -> bool:
    lower = value.strip().lower()
    if lower in _TRUE_VALUES:
        return True
    if lower in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name}: expected a boolean, got {value!r}")


def parse_capacity(value: str, *, name: str) -> int:
    try:
        capacity = int(value.strip())
    except ValueError:
        raise ConfigError(f"{name}: expected an integer, got {value!r}") from None
    if capacity < 0:
        raise ConfigError(f"{name}: must be non-negative, got {capacity}")
    return capacity


def load_config(environ: Mapping[str, str] | None = None) -> HistoryConfig:
    """Build a HistoryConfig from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``.

    Raises:
        ConfigError: If a variable is set to an unparseable value.
    """
    env = os.environ if environ is None else environ
    defaults = HistoryConfig()

    path = env.get(ENV_FILE) or defaults.path
    capacity = defaults.capacity
    unique = defaults.unique

    if env.get(ENV_SIZE):
        capacity = parse_capacity(env[ENV_SIZE], name=ENV_SIZE)
    if env.get(ENV_UNIQUE):
        unique = parse_bool(env[ENV_UNIQUE], name=ENV_UNIQUE)

    return HistoryConfig(path=os.path.expanduser(path), capacity=capacity, unique=unique)
