#!/usr/bin/env python3
"""
Text-mode host for an Istari session.

A line-oriented event loop: prompt_toolkit reads a line (with Up/Down bound
to the session's command history and Tab bound to the mode toggle), rich
prints the menu and output. In command mode the line is fed to the session;
in scroll mode it is read as scroll keys for the output viewport.
"""

from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console

from ..config import config
from ..exceptions import HandlerError
from ..logger import logger
from ..modes import Mode
from ..session import Session
from .components import MenuFormatter
from .scroll import ScrollState, split_lines

log = logger.get_logger("ui.text")

# Returned by the prompt when Tab is pressed
TOGGLE_MODE = "\x00toggle-mode"


class TextController:
    """Drives a Session from a terminal one input line at a time"""

    def __init__(self, session: Session, console: Optional[Console] = None,
                 prompt_session: Optional[PromptSession] = None,
                 page_size: Optional[int] = None, output_height: Optional[int] = None,
                 tick_rate_ms: Optional[int] = None):
        self.session = session
        self.console = console or Console()
        self.formatter = MenuFormatter(self.console)
        self.scroll = ScrollState(page_size or config.get("ui.scroll_page_size", 10))
        self.output_height = output_height or config.get("ui.output_height", 15)
        self.tick_rate_ms = tick_rate_ms or config.get("session.tick_rate_ms", 100)
        self.prompt_session = prompt_session or PromptSession(
            key_bindings=self._build_key_bindings(),
            bottom_toolbar=self.get_toolbar,
            refresh_interval=self.tick_rate_ms / 1000,
        )
        self.should_exit = False

    def _build_key_bindings(self) -> KeyBindings:
        bindings = KeyBindings()

        @bindings.add("up")
        def _history_up(event):
            if self.session.mode is Mode.COMMAND:
                self.session.history_up()
                self._load_input_buffer(event.app.current_buffer)

        @bindings.add("down")
        def _history_down(event):
            if self.session.mode is Mode.COMMAND:
                self.session.history_down()
                self._load_input_buffer(event.app.current_buffer)

        @bindings.add("tab")
        def _toggle_mode(event):
            event.app.exit(result=TOGGLE_MODE)

        return bindings

    def _load_input_buffer(self, buffer):
        buffer.text = self.session.input_buffer
        buffer.cursor_position = len(buffer.text)

    def get_prompt(self) -> str:
        if self.session.mode is Mode.SCROLL:
            return "(scroll) > "
        return f"({' › '.join(self.session.breadcrumb())}) > "

    def get_toolbar(self) -> str:
        """
        Bottom toolbar, redrawn every ``tick_rate_ms`` while the prompt waits

        Ticks the session so tick-driven output keeps arriving between
        commands, and shows the newest message.
        """
        if self.session.poisoned:
            return "Session stopped after a handler failure"
        try:
            self.session.tick()
        except HandlerError as e:
            # The session is poisoned now; the next command reports it
            return e.message
        messages = self.session.output_messages()
        if not messages:
            return ""
        lines = messages[-1].splitlines()
        return lines[-1] if lines else ""

    def render(self):
        """Tick the session, then print whatever the current mode shows"""
        self.session.tick()

        if self.session.mode is Mode.COMMAND:
            self.formatter.print_menu(self.session.current_menu(), self.session.breadcrumb())
            if self.session.take_dirty():
                self.formatter.print_last_output(self.session.output_messages())
        else:
            lines = split_lines(self.session.output_messages())
            self.scroll.update_auto_scroll(self.session.take_dirty(), len(lines), self.output_height)
            self.formatter.print_scroll_window(
                self.scroll.window(lines, self.output_height),
                self.scroll.position,
                ScrollState.max_scroll(len(lines), self.output_height),
                self.scroll.auto_scroll,
            )

        self.formatter.print_mode(self.session.mode)

    def handle_line(self, line: str) -> bool:
        """
        Route one prompt result

        Returns:
            False when the session asked to quit
        """
        if line == TOGGLE_MODE:
            mode = self.session.toggle_mode()
            log.debug(f"Switched to {mode.value} mode")
            return True

        if self.session.mode is Mode.SCROLL:
            lines = split_lines(self.session.output_messages())
            for key in line.strip():
                if not self.scroll.apply_key(key, len(lines), self.output_height):
                    self.formatter.print_status("warning", f"Unknown scroll key: {key}")
            return True

        self.session.clear_input_buffer()
        for char in line:
            self.session.add_to_input_buffer(char)
        return self.session.submit()

    def run(self):
        """Main loop; returns when the user quits from the root menu or sends EOF"""
        self.console.print("[bold cyan]Welcome to Istari (Text Mode)[/bold cyan]")
        self.console.print("[dim]Type commands and press Enter to execute. "
                           "Use Up/Down for history, 'b' to go back, 'q' to quit.[/dim]")

        while not self.should_exit:
            try:
                self.render()
                line = self.prompt_session.prompt(self.get_prompt())
                if not self.handle_line(line):
                    self.should_exit = True
            except KeyboardInterrupt:
                continue
            except EOFError:
                self.should_exit = True

        self.console.print("[yellow]Goodbye![/yellow]")


def run_text(session: Session, console: Optional[Console] = None):
    """Run ``session`` in text mode and close it afterwards"""
    with session:
        TextController(session, console=console).run()
