"""Shared test fixtures for the linehist test suite."""

import pytest

from linehist.store import HistoryStore


@pytest.fixture
def store():
    """Create an empty store with default settings."""
    return HistoryStore()


@pytest.fixture
def history_path(tmp_path):
    """Path of a history file that does not exist yet."""
    return str(tmp_path / "history")


@pytest.fixture
def make_store():
    """Factory building a store that holds the given lines in order."""

    def _make_store(*lines, capacity=1000, unique=True):
        store = HistoryStore(capacity=capacity, unique=unique)
        for line in lines:
            store.add(line)
        return store

    return _make_store


@pytest.fixture
def write_lines():
    """Factory writing lines to a history file, one per line."""

    def _write_lines(path, lines):
        with open(path, "w", encoding="utf-8") as fh:
            fh.writelines(f"{line}\n" for line in lines)

    return _write_lines


@pytest.fixture
def read_lines():
    """Factory reading a history file back as a list of lines."""

    def _read_lines(path):
        with open(path, encoding="utf-8") as fh:
            return fh.read().splitlines()

    return _read_lines
