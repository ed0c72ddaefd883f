#!/usr/bin/env python3
"""
Istari Menu Tree
Menus, menu items and the action handlers bound to them.

A menu tree is plain data: it is built once by the host, validated and
compiled by ``create_session`` and never changed afterwards. Navigation
state (the current menu and parent back-references) lives in the session's
``MenuArena``, not on the nodes.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

# Input tokens the session handles itself; they can never be item keys
QUIT_KEYS = ("q", "quit", "exit")
BACK_KEYS = ("b", "back")
RESERVED_KEYS = QUIT_KEYS + BACK_KEYS


class HandlerKind(Enum):
    """How a handler's result is obtained"""
    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True)
class ActionHandler:
    """
    A callable bound to a menu item, tagged sync or async.

    Both kinds are called as ``func(state, params)``. A sync handler returns
    the message (or None); an async handler returns an awaitable that resolves
    to the message.
    """
    kind: HandlerKind
    func: Callable[[Any, Optional[str]], Any]

    @classmethod
    def wrap(cls, handler: Union["ActionHandler", Callable]) -> "ActionHandler":
        """Tag a bare callable: coroutine functions are async, the rest sync"""
        if isinstance(handler, ActionHandler):
            return handler
        if not callable(handler):
            raise TypeError(f"Action handler must be callable, got {type(handler).__name__}")
        if inspect.iscoroutinefunction(handler):
            return cls(HandlerKind.ASYNC, handler)
        return cls(HandlerKind.SYNC, handler)

    @property
    def is_async(self) -> bool:
        return self.kind is HandlerKind.ASYNC


def sync_action(func: Callable[[Any, Optional[str]], Optional[str]]) -> ActionHandler:
    return ActionHandler(HandlerKind.SYNC, func)


def async_action(func: Callable[[Any, Optional[str]], Any]) -> ActionHandler:
    """Tag ``func`` as async even if it is a plain function returning an awaitable"""
    return ActionHandler(HandlerKind.ASYNC, func)


@dataclass
class MenuItem:
    """Represents a single selectable entry: either an action or a submenu"""
    key: str
    description: str
    action: Optional[ActionHandler] = None
    submenu: Optional["MenuNode"] = None

    def __post_init__(self):
        if (self.action is None) == (self.submenu is None):
            raise ValueError(f"Menu item '{self.key}' needs exactly one of an action or a submenu")

    @property
    def is_submenu(self) -> bool:
        return self.submenu is not None

    @property
    def normalized_key(self) -> str:
        return self.key.lower()

    def matches(self, key: str) -> bool:
        return self.normalized_key == key.lower()


class MenuNode:
    """One screen of selectable items"""

    def __init__(self, title: str):
        self.title = title
        self.items: List[MenuItem] = []

    def add_item(self, item: MenuItem) -> "MenuNode":
        self.items.append(item)
        return self

    def add_action(self, key: str, description: str, handler) -> "MenuNode":
        """Add an action item; bare coroutine functions are registered as async"""
        return self.add_item(MenuItem(str(key), description, action=ActionHandler.wrap(handler)))

    def add_async_action(self, key: str, description: str, handler) -> "MenuNode":
        return self.add_item(MenuItem(str(key), description, action=async_action(handler)))

    def add_submenu(self, key: str, description: str, submenu: "MenuNode") -> "MenuNode":
        if not isinstance(submenu, MenuNode):
            raise TypeError(f"Submenu for '{key}' must be a MenuNode")
        return self.add_item(MenuItem(str(key), description, submenu=submenu))

    def find(self, key: str) -> Optional[Tuple[int, MenuItem]]:
        """First item matching ``key`` case-insensitively, with its index"""
        for index, item in enumerate(self.items):
            if item.matches(key):
                return index, item
        return None

    def get_item(self, key: str) -> Optional[MenuItem]:
        found = self.find(key)
        return found[1] if found else None

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __repr__(self):
        return f"MenuNode(title={self.title!r}, items={[item.key for item in self.items]!r})"


# Construction API for hosts that prefer functions over the fluent methods

def new_menu(title: str) -> MenuNode:
    return MenuNode(title)


def add_action(menu: MenuNode, key: str, description: str, handler) -> MenuNode:
    """
    Add an action item to ``menu``

    Key problems (duplicates, reserved keys) are reported when the session is
    created, not here.
    """
    return menu.add_action(key, description, handler)


def add_async_action(menu: MenuNode, key: str, description: str, handler) -> MenuNode:
    return menu.add_async_action(key, description, handler)


def add_submenu(menu: MenuNode, key: str, description: str, child_menu: MenuNode) -> MenuNode:
    return menu.add_submenu(key, description, child_menu)
