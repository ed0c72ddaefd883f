#!/usr/bin/env python3
"""
Istari Navigation
Tracks the current menu and moves between a menu and its submenus.
"""

from typing import List, Optional, Tuple

from .arena import MenuArena
from .logger import logger
from .menu import MenuItem, MenuNode

log = logger.get_logger("navigation")


class NavigationController:
    """Current position in a compiled menu tree"""

    def __init__(self, arena: MenuArena):
        self.arena = arena
        self._current = MenuArena.ROOT

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def current_menu(self) -> MenuNode:
        return self.arena.node(self._current)

    def find_item(self, key: str) -> Optional[Tuple[int, MenuItem]]:
        return self.current_menu.find(key)

    def enter_submenu(self, key: str) -> bool:
        """
        Navigate into the submenu named by ``key``

        Returns:
            True if the current menu changed, False if ``key`` is unknown or
            names an action
        """
        found = self.find_item(key)
        if found is None:
            return False

        item_index, item = found
        child = self.arena.child(self._current, item_index)
        if child is None:
            return False

        self.arena.attach(child, self._current)
        log.debug(f"Entering '{item.submenu.title}' from '{self.current_menu.title}'")
        self._current = child
        return True

    def go_back(self) -> bool:
        parent = self.arena.parent(self._current)
        if parent is None:
            return False
        log.debug(f"Leaving '{self.current_menu.title}'")
        self._current = parent
        return True

    def is_at_root(self) -> bool:
        return self.arena.parent(self._current) is None

    def breadcrumb(self) -> List[str]:
        """Menu titles from the root down to the current menu"""
        titles = []
        index = self._current
        while index is not None:
            titles.append(self.arena.node(index).title)
            index = self.arena.parent(index)
        return list(reversed(titles))
