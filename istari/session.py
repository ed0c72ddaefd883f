#!/usr/bin/env python3
"""
Istari Session
The facade a host event loop talks to: input editing, history, dispatch,
mode, output and ticks over one validated menu tree and one application state.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from .arena import MenuArena
from .config import config
from .dispatcher import ActionDispatcher, AsyncRunner, ResolutionKind
from .exceptions import ActionTimeoutError, HandlerError, SessionPoisonedError
from .history import CommandHistory
from .logger import logger
from .menu import BACK_KEYS, QUIT_KEYS, MenuNode
from .modes import Mode, ModeController
from .navigation import NavigationController
from .output import OutputBuffer
from .validator import validate

log = logger.get_logger("session")

QUIT_HINT = "Use 'b' to return to previous menu, or navigate to root menu to quit"
ALREADY_AT_ROOT = "Already at root menu"

TickHandler = Callable[[Any, List[str], float], None]


@dataclass(frozen=True)
class MenuItemView:
    key: str
    description: str
    is_submenu: bool


@dataclass(frozen=True)
class MenuView:
    """Read-only snapshot of the current menu for renderers"""
    title: str
    items: Tuple[MenuItemView, ...]
    is_root: bool


def parse_input(raw: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Split an input line into a lower-cased command and optional parameters

    >>> parse_input("  Inc 5 ")
    ('inc', '5')
    """
    line = raw.strip()
    if not line:
        return None
    parts = line.split(" ", 1)
    command = parts[0].lower()
    params = parts[1].strip() if len(parts) > 1 else None
    return command, params or None


class Session:
    """A running menu over host state; build it with ``create_session``"""

    def __init__(self, arena: MenuArena, state: Any, history_size: int = 100,
                 tick_handler: Optional[TickHandler] = None,
                 async_timeout: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.arena = arena
        self._state = state
        self.navigation = NavigationController(arena)
        self.modes = ModeController()
        self.history = CommandHistory(history_size)
        self.output = OutputBuffer()
        # Last, so a rejected option never leaves an open event loop behind
        self.runner = AsyncRunner(async_timeout)
        self.dispatcher = ActionDispatcher(self.navigation, self.runner)
        self.tick_handler = tick_handler
        self._clock = clock
        self._last_tick = clock()
        self._input_buffer = ""
        self._show_input = False
        self._poison: Optional[HandlerError] = None

    # ============ STATE & LIFECYCLE ============

    @property
    def state(self) -> Any:
        return self._state

    @property
    def poisoned(self) -> bool:
        return self._poison is not None

    def _ensure_usable(self):
        if self._poison is not None:
            raise SessionPoisonedError(cause=self._poison.message)

    def close(self):
        """Release the async runner's event loop"""
        self.runner.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ============ MENU QUERIES ============

    def current_menu(self) -> MenuView:
        menu = self.navigation.current_menu
        items = tuple(MenuItemView(item.key, item.description, item.is_submenu) for item in menu.items)
        return MenuView(menu.title, items, self.navigation.is_at_root())

    def breadcrumb(self) -> List[str]:
        return self.navigation.breadcrumb()

    def is_at_root(self) -> bool:
        return self.navigation.is_at_root()

    # ============ DISPATCH ============

    def dispatch(self, raw_input: str) -> bool:
        """
        Record and execute one input line

        Returns:
            False when the user asked to quit from the root menu, else True
        """
        self._ensure_usable()
        parsed = parse_input(raw_input)
        if parsed is None:
            return True

        self.history.add(raw_input.strip())
        # A repeated command is not re-added, but it still ends browsing
        self.history.exit_browsing()
        command, params = parsed
        return self.handle_key(command, params)

    def handle_key(self, key: str, params: Optional[str] = None) -> bool:
        """Handle an already split command; reserved keys win over menu items"""
        self._ensure_usable()
        key = key.lower()

        if key in QUIT_KEYS:
            if self.navigation.is_at_root():
                log.info("Quit requested at root menu")
                return False
            self.add_output(QUIT_HINT)
            return True

        if key in BACK_KEYS:
            if not self.navigation.go_back():
                self.add_output(ALREADY_AT_ROOT)
            return True

        resolution = self.dispatcher.resolve(key)
        if resolution.kind is ResolutionKind.SUBMENU:
            self.navigation.enter_submenu(key)
        elif resolution.kind is ResolutionKind.ACTION:
            self._run_action(resolution.item, params)
        else:
            log.debug(f"Unknown command: {key}")
            self.add_output(f"Unknown command: {key}")
        return True

    def _run_action(self, item, params: Optional[str]):
        try:
            message = self.dispatcher.execute(item, self._state, params)
        except ActionTimeoutError as e:
            self.add_output(f"Action '{item.key}' timed out: {e.message}")
            return
        except HandlerError as e:
            self._poison = e
            log.critical(f"Session poisoned: {e.message}")
            raise

        if message is not None:
            self.add_output(message)

    # ============ MODE ============

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    def toggle_mode(self) -> Mode:
        return self.modes.toggle()

    def set_mode(self, mode: Mode):
        self.modes.set(mode)

    # ============ INPUT BUFFER ============

    @property
    def input_buffer(self) -> str:
        return self._input_buffer

    def add_to_input_buffer(self, char: str):
        self._input_buffer += char

    def backspace_input_buffer(self):
        self._input_buffer = self._input_buffer[:-1]

    def clear_input_buffer(self):
        self._input_buffer = ""

    def submit(self) -> bool:
        """Dispatch the input buffer, then clear it"""
        try:
            return self.dispatch(self._input_buffer)
        finally:
            self.clear_input_buffer()

    @property
    def show_input(self) -> bool:
        return self._show_input

    def toggle_show_input(self):
        self._show_input = not self._show_input

    # ============ HISTORY ============

    def history_up(self):
        entry = self.history.up()
        if entry is not None:
            self._input_buffer = entry

    def history_down(self):
        entry = self.history.down()
        self._input_buffer = entry if entry is not None else ""

    def exit_history_browsing(self):
        self.history.exit_browsing()

    # ============ OUTPUT ============

    def output_messages(self) -> Tuple[str, ...]:
        return self.output.messages

    def add_output(self, message: str):
        self.output.append(message)

    def take_dirty(self) -> bool:
        return self.output.take_dirty()

    def clear_output(self):
        self.output.clear()

    # ============ TICK ============

    def tick(self, delta_seconds: Optional[float] = None):
        """
        Run the host tick callback, if any

        Messages the callback appends to its copy of the output are added to
        the output buffer; nothing else is touched.
        """
        self._ensure_usable()
        now = self._clock()
        if delta_seconds is None:
            delta_seconds = now - self._last_tick
        self._last_tick = now

        if self.tick_handler is None:
            return

        messages = list(self.output.messages)
        known = len(messages)
        try:
            self.tick_handler(self._state, messages, delta_seconds)
        except Exception as e:
            self._poison = HandlerError(f"Tick handler failed: {e}")
            log.critical(f"Session poisoned: {self._poison.message}", exc_info=True)
            raise self._poison from e

        if len(messages) > known:
            self.output.extend(messages[known:])


def create_session(root_menu: MenuNode, initial_state: Any, *,
                   history_size: Optional[int] = None,
                   tick_handler: Optional[TickHandler] = None,
                   async_timeout: Optional[float] = None) -> Session:
    """
    Validate ``root_menu`` and start a session over ``initial_state``

    Unspecified options come from the ``session`` configuration section.

    Raises:
        ValidationError: the menu tree has reserved, duplicate or cyclic keys
        ConfigurationError: history_size is below 1 or async_timeout is negative
    """
    validate(root_menu)

    if history_size is None:
        history_size = config.get("session.history_size", 100)
    if async_timeout is None:
        async_timeout = config.get("session.async_timeout") or None

    arena = MenuArena(root_menu)
    log.info(f"Session created for '{root_menu.title}' with {len(arena)} menus")
    return Session(arena, initial_state, history_size=history_size,
                   tick_handler=tick_handler, async_timeout=async_timeout)
