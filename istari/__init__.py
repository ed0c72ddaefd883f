"""
Istari - embeddable engine for interactive, tree-structured command menus
"""

from .version import __version__, __status__
from .exceptions import (
    IstariException, ValidationError, DuplicateKeyError, ReservedKeyError,
    CyclicMenuError, ConfigurationError, HandlerError, ActionTimeoutError,
    SessionPoisonedError,
)
from .menu import (
    RESERVED_KEYS, ActionHandler, HandlerKind, MenuItem, MenuNode,
    add_action, add_async_action, add_submenu, async_action, new_menu, sync_action,
)
from .modes import Mode
from .history import CommandHistory
from .output import OutputBuffer
from .validator import validate
from .session import MenuItemView, MenuView, Session, create_session, parse_input

__all__ = [
    '__version__', '__status__',
    'IstariException', 'ValidationError', 'DuplicateKeyError', 'ReservedKeyError',
    'CyclicMenuError', 'ConfigurationError', 'HandlerError', 'ActionTimeoutError',
    'SessionPoisonedError',
    'RESERVED_KEYS', 'ActionHandler', 'HandlerKind', 'MenuItem', 'MenuNode',
    'add_action', 'add_async_action', 'add_submenu', 'async_action', 'new_menu', 'sync_action',
    'Mode', 'CommandHistory', 'OutputBuffer', 'validate',
    'MenuItemView', 'MenuView', 'Session', 'create_session', 'parse_input',
]
