"""
Pytest configuration for lazychain tests.

This file ensures that the project root is in the Python path so that
test files can import the lazychain package without installing it, and
provides an enumerable source that records every read.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

import pytest

from lazychain import Cursor, Enumerable, reset_settings


class RecordingCursor(Cursor):
    """Sequence cursor that reports every advance and read to its owner"""

    def __init__(self, owner):
        self._owner = owner
        self._index = -1

    def current(self):
        if 0 <= self._index < len(self._owner.items):
            self._owner.reads += 1
            return self._owner.items[self._index]
        return None

    def current_index(self):
        if 0 <= self._index < len(self._owner.items):
            return self._index
        return None

    def move_next(self):
        self._owner.moves += 1
        if self._index + 1 >= len(self._owner.items):
            self._index = len(self._owner.items)
            return False
        self._index += 1
        return True

    def reset(self):
        self._owner.resets += 1
        self._index = -1


class RecordingSource(Enumerable):
    """Enumerable over a list that counts cursors, moves, reads and resets"""

    def __init__(self, items):
        self.items = list(items)
        self.cursors = 0
        self.moves = 0
        self.reads = 0
        self.resets = 0

    def get_cursor(self):
        self.cursors += 1
        return RecordingCursor(self)

    @property
    def touched(self):
        return self.moves + self.reads


@pytest.fixture
def recording_source():
    """Factory fixture building RecordingSource instances"""
    return RecordingSource


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts and ends with default settings"""
    reset_settings()
    yield
    reset_settings()
