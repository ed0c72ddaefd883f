#!/usr/bin/env python3
"""
Istari Menu Arena
Validated menu trees compiled into index-addressed slots.

Every attachment of a ``MenuNode`` gets its own slot, so a node added as a
submenu in two places has two independent parent back-references. Parent
slots start empty and are filled in by navigation the first time a slot is
entered.

The slot count is the number of paths from the root, so a deep tree that
reuses the same submenus at every level grows exponentially.
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .menu import MenuNode


@dataclass
class ArenaSlot:
    node: MenuNode
    # item index within node.items -> slot index of that submenu attachment
    children: Dict[int, int] = field(default_factory=dict)
    parent: Optional[int] = None


class MenuArena:
    """Owns every compiled menu slot; navigation only moves indices around"""

    ROOT = 0

    def __init__(self, root: MenuNode):
        self._slots: List[ArenaSlot] = []
        self._lock = threading.Lock()
        self._compile(root)

    def _compile(self, node: MenuNode) -> int:
        index = len(self._slots)
        slot = ArenaSlot(node)
        self._slots.append(slot)
        for item_index, item in enumerate(node.items):
            if item.submenu is not None:
                slot.children[item_index] = self._compile(item.submenu)
        return index

    def node(self, index: int) -> MenuNode:
        return self._slots[index].node

    def child(self, index: int, item_index: int) -> Optional[int]:
        """Slot of the submenu attached at ``item_index`` of slot ``index``"""
        return self._slots[index].children.get(item_index)

    def parent(self, index: int) -> Optional[int]:
        with self._lock:
            return self._slots[index].parent

    def attach(self, index: int, parent: int):
        """Record ``parent`` as the back-reference of slot ``index``"""
        with self._lock:
            self._slots[index].parent = parent

    @property
    def root(self) -> MenuNode:
        return self.node(self.ROOT)

    def __len__(self):
        return len(self._slots)
