#!/usr/bin/env python3
"""
Istari Demo Menus
Small applications showing sync, async, nested and tick-driven menus.

Each builder returns a ``Demo``; the CLI turns it into a session.
"""

import asyncio
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .menu import MenuNode, new_menu


@dataclass
class Demo:
    name: str
    description: str
    menu: MenuNode
    state: Any
    tick_handler: Optional[Callable] = None


def parse_int(params: Optional[str], default: int) -> int:
    """Integer parameter, falling back to ``default`` when absent or malformed"""
    if params is None:
        return default
    try:
        return int(params.strip())
    except ValueError:
        return default


# ============ COUNTER ============

@dataclass
class CounterState:
    counter: int = 0


def increment(state: CounterState, params: Optional[str]) -> str:
    amount = parse_int(params, 1)
    state.counter += amount
    return f"Counter incremented by {amount} to {state.counter}"


def decrement(state: CounterState, params: Optional[str]) -> str:
    amount = parse_int(params, 1)
    state.counter -= amount
    return f"Counter decremented by {amount} to {state.counter}"


def build_counter_demo() -> Demo:
    settings = new_menu("Settings")

    def reset(state, params):
        state.counter = parse_int(params, 0)
        return f"Counter reset to {state.counter}"

    def double(state, params):
        multiplier = parse_int(params, 2)
        state.counter *= multiplier
        return f"Counter multiplied by {multiplier} to {state.counter}"

    def silent_update(state, params):
        state.counter += parse_int(params, 5)
        return None

    def log_output(state, params):
        lines = parse_int(params, 50)
        return "\n".join(f"Log line {i}: Counter is currently {state.counter}"
                         for i in range(1, lines + 1))

    settings.add_action("r", "Reset Counter (optionally to value)", reset)
    settings.add_action("d", "Double Counter (optional multiplier)", double)
    settings.add_action("s", "Silent Update (optional amount)", silent_update)
    settings.add_action("l", "Generate Log Output (optional lines)", log_output)

    root = new_menu("Main Menu")
    root.add_action("inc", "Increment Counter (optional amount)", increment)
    root.add_action("dec", "Decrement Counter (optional amount)", decrement)
    root.add_submenu("s", "Settings", settings)

    return Demo("counter", "Counter with a settings submenu", root, CounterState())


# ============ ASYNC ============

@dataclass
class AsyncState:
    counter: int = 0
    async_counter: int = 0
    last_operation: str = "None"
    delay_scale: float = 1.0


def build_async_demo(delay_scale: float = 1.0) -> Demo:
    def sync_increment(state, params):
        amount = parse_int(params, 1)
        state.counter += amount
        state.last_operation = f"Sync increment by {amount}"
        return f"Counter synchronously incremented by {amount} to {state.counter}"

    async def async_increment(state, params):
        amount = parse_int(params, 1)
        delay_ms = 1000
        state.async_counter += amount
        state.last_operation = f"Async increment by {amount} after {delay_ms}ms"
        await asyncio.sleep(delay_ms / 1000 * state.delay_scale)
        return (f"Async counter incremented by {amount} to {state.async_counter} "
                f"(after {delay_ms}ms delay)")

    def async_decrement(state, params):
        # Mutate now, report once the deferred part finishes
        amount = parse_int(params, 1)
        delay_ms = 500
        state.async_counter -= amount
        state.last_operation = f"Async decrement by {amount} after {delay_ms}ms"
        new_value = state.async_counter

        async def finish():
            await asyncio.sleep(delay_ms / 1000 * state.delay_scale)
            return (f"Async counter decremented by {amount} to {new_value} "
                    f"(after {delay_ms}ms delay)")

        return finish()

    def view(state, params):
        return (f"Current State:\n- Sync Counter: {state.counter}\n"
                f"- Async Counter: {state.async_counter}\n"
                f"- Last Operation: {state.last_operation}")

    root = new_menu("Async/Sync Demo")
    root.add_action("i", "Synchronously Increment Counter", sync_increment)
    root.add_action("a", "Asynchronously Increment Counter (with delay)", async_increment)
    root.add_async_action("s", "Asynchronously Decrement Counter (with delay)", async_decrement)
    root.add_action("v", "View Current State", view)

    return Demo("async", "Sync and async actions side by side", root,
                AsyncState(delay_scale=delay_scale))


# ============ ADVANCED ============

@dataclass
class AppSettings:
    theme: str = "Default"
    notifications: bool = True
    auto_save: bool = False


@dataclass
class AdvancedState:
    counter: int = 0
    name: str = "User"
    settings: AppSettings = field(default_factory=AppSettings)
    history: List[str] = field(default_factory=list)


THEMES = {"Default": "Dark", "Dark": "Light"}
NAMES = ("Alice", "Bob", "Charlie", "Diana", "Ethan", "Fiona")


def build_advanced_demo() -> Demo:
    counter_menu = new_menu("Counter Operations")

    def counter_op(verb, default, apply):
        def handler(state, params):
            amount = parse_int(params, default)
            state.counter = apply(state.counter, amount)
            state.history.append(f"{verb} counter by {amount} to {state.counter}")
            return f"Counter {verb.lower()} by {amount} to {state.counter}"
        return handler

    counter_menu.add_action("i", "Increment (optional amount)", counter_op("Incremented", 1, lambda c, a: c + a))
    counter_menu.add_action("d", "Decrement (optional amount)", counter_op("Decremented", 1, lambda c, a: c - a))
    counter_menu.add_action("m", "Multiply (optional factor)", counter_op("Multiplied", 2, lambda c, a: c * a))

    def reset(state, params):
        old_value, state.counter = state.counter, parse_int(params, 0)
        state.history.append(f"Reset counter from {old_value} to {state.counter}")
        return f"Counter has been reset to {state.counter}"

    counter_menu.add_action("r", "Reset (optional value)", reset)

    settings_menu = new_menu("Settings")

    def change_theme(state, params):
        state.settings.theme = params or THEMES.get(state.settings.theme, "Default")
        return f"Theme changed to {state.settings.theme}"

    def toggle_notifications(state, params):
        state.settings.notifications = not state.settings.notifications
        return f"Notifications are now {'enabled' if state.settings.notifications else 'disabled'}"

    def toggle_auto_save(state, params):
        state.settings.auto_save = not state.settings.auto_save
        return f"Auto-save is now {'enabled' if state.settings.auto_save else 'disabled'}"

    settings_menu.add_action("t", "Change Theme", change_theme)
    settings_menu.add_action("n", "Toggle Notifications", toggle_notifications)
    settings_menu.add_action("a", "Toggle Auto-save", toggle_auto_save)

    user_menu = new_menu("User")

    def rename(state, params):
        old_name = state.name
        if params is not None and not params.strip():
            return "Name cannot be empty"
        state.name = params.strip() if params else random.choice(NAMES)
        return f"Name changed from {old_name} to {state.name}"

    def view_history(state, params):
        if not state.history:
            return "No history available yet."
        limit = parse_int(params, len(state.history))
        start = max(len(state.history) - limit, 0)
        lines = [f"{i + 1}. {entry}" for i, entry in enumerate(state.history) if i >= start]
        return f"Action History (last {len(lines)} items):\n" + "\n".join(lines)

    def clear_history(state, params):
        count = len(state.history)
        state.history.clear()
        return f"Cleared {count} history items"

    user_menu.add_action("r", "Rename User", rename)
    user_menu.add_action("h", "View History", view_history)
    user_menu.add_action("c", "Clear History", clear_history)
    # Settings is reachable from the root and from the user menu
    user_menu.add_submenu("s", "Settings", settings_menu)

    def status(state, params):
        return ("Current Status:\n"
                f"- User: {state.name}\n"
                f"- Counter: {state.counter}\n"
                f"- Theme: {state.settings.theme}\n"
                f"- Notifications: {'Enabled' if state.settings.notifications else 'Disabled'}\n"
                f"- Auto-save: {'Enabled' if state.settings.auto_save else 'Disabled'}\n"
                f"- History Items: {len(state.history)}")

    root = new_menu("Advanced Demo")
    root.add_action("s", "Show Status", status)
    root.add_submenu("c", "Counter Operations", counter_menu)
    root.add_submenu("o", "Settings", settings_menu)
    root.add_submenu("u", "User", user_menu)

    return Demo("advanced", "Nested menus with a shared settings submenu", root, AdvancedState())


# ============ ANIMATED ============

SPINNER_FRAMES = ("Loading |", "Loading /", "Loading -", "Loading \\")


@dataclass
class AnimatedState:
    counter: int = 0
    frame: int = 0
    since_update: float = 0.0
    update_interval: float = 0.25
    animating: bool = False
    timer_remaining: Optional[float] = None

    def advance(self, delta: float) -> Optional[str]:
        """Next animation message once ``update_interval`` has elapsed"""
        if self.timer_remaining is not None:
            self.timer_remaining -= delta
            if self.timer_remaining <= 0:
                self.timer_remaining = None
                self.animating = False
                return "Timer completed!"

        self.since_update += delta
        if not self.animating or self.since_update < self.update_interval:
            return None
        self.since_update = 0.0
        self.frame = (self.frame + 1) % len(SPINNER_FRAMES)
        if self.timer_remaining is not None:
            return f"{SPINNER_FRAMES[self.frame]} (Timer: {int(self.timer_remaining)}s remaining)"
        return SPINNER_FRAMES[self.frame]


def animation_tick(state: AnimatedState, messages: List[str], delta: float):
    message = state.advance(delta)
    if message is not None:
        messages.append(message)


def build_animated_demo() -> Demo:
    def start_timer(state, params):
        seconds = parse_int(params, 10)
        state.animating = True
        state.timer_remaining = float(seconds)
        return f"Timer started! ({seconds} seconds)"

    def toggle_animation(state, params):
        state.animating = not state.animating
        if state.animating:
            state.timer_remaining = None
            return "Animation started!"
        return "Animation stopped!"

    root = new_menu("Animated Demo")
    root.add_action("1", "Increment Counter (optional amount)", increment)
    root.add_action("2", "Decrement Counter (optional amount)", decrement)
    root.add_action("t", "Start Timer (seconds)", start_timer)
    root.add_action("a", "Toggle Animation", toggle_animation)

    return Demo("animated", "Tick-driven spinner and countdown timer", root,
                AnimatedState(), tick_handler=animation_tick)


DEMOS: Dict[str, Callable[[], Demo]] = {
    "counter": build_counter_demo,
    "async": build_async_demo,
    "advanced": build_advanced_demo,
    "animated": build_animated_demo,
}


def get_demo(name: str) -> Demo:
    try:
        builder = DEMOS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown demo '{name}'. Available: {', '.join(DEMOS)}") from None
    return builder()
