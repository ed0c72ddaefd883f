#!/usr/bin/env python3
"""
Istari Command History
Bounded, order-preserving log of submitted input with a browse cursor
"""

from collections import deque
from typing import Optional, Tuple

from .exceptions import ConfigurationError


class CommandHistory:
    """Command history with up/down browsing like a shell prompt"""

    def __init__(self, max_size: int = 100):
        if max_size < 1:
            raise ConfigurationError("History size must be at least 1", "session.history_size")
        self.max_size = max_size
        self._entries = deque(maxlen=max_size)
        # None means "not browsing"
        self._position: Optional[int] = None

    def add(self, entry: str):
        """
        Record a submitted command

        Empty strings and immediate repeats of the newest entry are ignored.
        When the history is full the oldest entry is dropped.
        """
        if not entry:
            return
        if self._entries and self._entries[-1] == entry:
            return

        self._entries.append(entry)
        self._position = None

    def up(self) -> Optional[str]:
        """Step towards older entries; clamps at the oldest one"""
        if not self._entries:
            return None

        if self._position is None:
            self._position = len(self._entries) - 1
        elif self._position > 0:
            self._position -= 1

        return self._entries[self._position]

    def down(self) -> Optional[str]:
        """
        Step towards newer entries

        Returns None when not browsing, and also when stepping past the newest
        entry, which ends browsing (callers clear their input line).
        """
        if self._position is None:
            return None

        if self._position < len(self._entries) - 1:
            self._position += 1
            return self._entries[self._position]

        self._position = None
        return None

    def exit_browsing(self):
        self._position = None

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    @property
    def position(self) -> Optional[int]:
        return self._position

    @property
    def is_browsing(self) -> bool:
        return self._position is not None

    def __len__(self):
        return len(self._entries)
