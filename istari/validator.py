#!/usr/bin/env python3
"""
Istari Menu Validator
One-time structural check of a menu tree before a session is built
"""

from typing import List, Set

from .exceptions import CyclicMenuError, DuplicateKeyError, ReservedKeyError
from .logger import logger
from .menu import RESERVED_KEYS, MenuNode

log = logger.get_logger("validator")


def validate(root: MenuNode) -> None:
    """
    Walk the tree depth-first and raise on the first structural problem

    Raises:
        ReservedKeyError: an item uses q, b, quit, exit or back
        DuplicateKeyError: two items of one menu share a key (case-insensitive)
        CyclicMenuError: a submenu contains one of its own ancestors
    """
    _validate_node(root, [])
    log.debug(f"Menu tree '{root.title}' passed validation")


def _validate_node(node: MenuNode, ancestors: List[int]) -> None:
    seen: Set[str] = set()
    ancestors.append(id(node))

    for item in node.items:
        key = item.normalized_key
        if key in RESERVED_KEYS:
            raise ReservedKeyError(item.key, node.title)
        if key in seen:
            raise DuplicateKeyError(item.key, node.title)
        seen.add(key)

        if item.submenu is not None:
            if id(item.submenu) in ancestors:
                raise CyclicMenuError(item.key, node.title)
            _validate_node(item.submenu, ancestors)

    ancestors.pop()
