#!/usr/bin/env python3
"""
Istari Action Dispatcher
Resolves keys against the current menu and runs action handlers, driving
async handlers to completion on the calling thread.
"""

import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Optional

from .exceptions import ActionTimeoutError, ConfigurationError, HandlerError
from .logger import logger
from .menu import MenuItem
from .navigation import NavigationController

log = logger.get_logger("dispatcher")


class ResolutionKind(Enum):
    NONE = "none"
    SUBMENU = "submenu"
    ACTION = "action"


@dataclass(frozen=True)
class Resolution:
    """What a key names in the current menu"""
    kind: ResolutionKind
    item: Optional[MenuItem] = None

    def __bool__(self):
        return self.kind is not ResolutionKind.NONE


class AsyncRunner:
    """
    Drives one awaitable at a time to completion on a private event loop.

    The loop is created once and reused for every call until ``close()``.
    It must not be used from a thread that is already running an event loop.
    """

    def __init__(self, timeout: Optional[float] = None):
        if timeout is not None and timeout < 0:
            raise ConfigurationError("session.async_timeout must be 0 or greater",
                                     "session.async_timeout")
        self.timeout = timeout if timeout else None
        self._loop = asyncio.new_event_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def closed(self) -> bool:
        return self._loop.is_closed()

    def run(self, awaitable: Awaitable[Any]) -> Any:
        """
        Block until ``awaitable`` completes and return its result

        If the loop is left early, e.g. by KeyboardInterrupt, the task is
        cancelled before the interrupt propagates so it cannot resume during a
        later call.

        Raises:
            ActionTimeoutError: a timeout is configured and was exceeded
        """
        if self.timeout is not None:
            awaitable = asyncio.wait_for(awaitable, self.timeout)
        task = asyncio.ensure_future(awaitable, loop=self._loop)
        try:
            return self._loop.run_until_complete(task)
        except asyncio.TimeoutError:
            if self.timeout is None:
                raise
            raise ActionTimeoutError(
                f"Action did not complete within {self.timeout} seconds",
                timeout=self.timeout
            )
        except BaseException:
            self._cancel(task)
            raise

    def _cancel(self, task: asyncio.Future):
        """Cancel ``task`` and let the loop run until it has settled"""
        if task.done():
            return
        task.cancel()
        try:
            self._loop.run_until_complete(task)
        except asyncio.CancelledError:
            log.debug("Interrupted action cancelled")
        except Exception as e:
            log.warning(f"Interrupted action failed while cancelling: {e}")

    def close(self):
        if self._loop.is_closed():
            return
        try:
            self._loop.run_until_complete(self._loop.shutdown_asyncgens())
        finally:
            self._loop.close()


class ActionDispatcher:
    """Looks up menu items and executes their handlers one call at a time"""

    def __init__(self, navigation: NavigationController, runner: AsyncRunner):
        self.navigation = navigation
        self.runner = runner

    def resolve(self, key: str) -> Resolution:
        """Classify ``key`` against the current menu without side effects"""
        found = self.navigation.find_item(key)
        if found is None:
            return Resolution(ResolutionKind.NONE)
        item = found[1]
        if item.is_submenu:
            return Resolution(ResolutionKind.SUBMENU, item)
        return Resolution(ResolutionKind.ACTION, item)

    def execute(self, item: MenuItem, state: Any, params: Optional[str] = None) -> Optional[str]:
        """
        Run the handler of ``item`` against ``state``

        Args:
            item: An action item of the current menu
            state: Host application state, mutated by the handler
            params: Text after the command, if any

        Returns:
            The handler's message, or None for a silent action

        Raises:
            HandlerError: the handler raised, or an async handler returned
                something that cannot be awaited
            ActionTimeoutError: an async handler exceeded the runner timeout
        """
        if item.action is None:
            raise ValueError(f"Menu item '{item.key}' has no action")

        handler = item.action
        menu_title = self.navigation.current_menu.title
        log.debug(f"Executing {handler.kind.value} action '{item.key}' in '{menu_title}'")

        try:
            result = handler.func(state, params)
            if handler.is_async:
                if not inspect.isawaitable(result):
                    raise TypeError(
                        f"async handler returned {type(result).__name__}, expected an awaitable"
                    )
                result = self.runner.run(result)
        except ActionTimeoutError as e:
            e.details["key"] = item.key
            log.warning(f"Action '{item.key}' in '{menu_title}' timed out")
            raise
        except Exception as e:
            log.error(f"Action '{item.key}' in '{menu_title}' failed: {e}", exc_info=True)
            raise HandlerError(
                f"Action '{item.key}' failed: {e}", key=item.key, menu_title=menu_title
            ) from e

        if result is None:
            return None
        return str(result)
