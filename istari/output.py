#!/usr/bin/env python3
"""
Istari Output Buffer
Append-only message log with an edge-triggered "new output" flag
"""

from typing import Iterable, List, Tuple


class OutputBuffer:
    """Ordered output messages plus a dirty flag cleared on read"""

    def __init__(self):
        self._messages: List[str] = []
        self._dirty = False

    def append(self, message: str):
        """Add a message and mark the buffer dirty"""
        self._messages.append(message)
        self._dirty = True

    def extend(self, messages: Iterable[str]):
        for message in messages:
            self.append(message)

    @property
    def messages(self) -> Tuple[str, ...]:
        return tuple(self._messages)

    def take_dirty(self) -> bool:
        """
        Return whether messages arrived since the last call, then reset the flag.

        There is a single flag, so only one consumer should poll it.
        """
        dirty = self._dirty
        self._dirty = False
        return dirty

    def clear(self):
        self._messages.clear()
        self._dirty = False

    def __len__(self):
        return len(self._messages)
