#!/usr/bin/env python3

from typing import List, Optional
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..modes import Mode
from ..session import MenuView


class StatusIndicator:
    STATUS_SYMBOLS = {
        "success": "✓",
        "error": "✗",
        "warning": "⚠",
        "info": "ℹ",
    }

    STATUS_COLORS = {
        "success": "green",
        "error": "red",
        "warning": "yellow",
        "info": "cyan",
    }

    @staticmethod
    def get_indicator(status: str) -> Text:
        symbol = StatusIndicator.STATUS_SYMBOLS.get(status, "?")
        color = StatusIndicator.STATUS_COLORS.get(status, "white")
        return Text(symbol, style=color)

    @staticmethod
    def format_status_message(status: str, message: str) -> Text:
        indicator = StatusIndicator.get_indicator(status)
        color = StatusIndicator.STATUS_COLORS.get(status, "white")
        text = Text()
        text.append(indicator)
        text.append(" ")
        text.append(message, style=color)
        return text


class MenuFormatter:
    MODE_STYLES = {
        Mode.COMMAND: ("COMMAND MODE", "bold green"),
        Mode.SCROLL: ("SCROLL MODE", "bold yellow"),
    }

    def __init__(self, console: Console):
        self.console = console

    def print_status(self, status: str, message: str):
        self.console.print(StatusIndicator.format_status_message(status, message))

    def build_menu_table(self, view: MenuView, breadcrumb: Optional[List[str]] = None) -> Table:
        title = " › ".join(breadcrumb) if breadcrumb else view.title
        table = Table(title=Text(title, style="bold cyan"), show_header=False,
                      show_edge=False, pad_edge=False)
        table.add_column("Key", style="yellow", justify="right", no_wrap=True)
        table.add_column("Description", style="white")
        table.add_column("", style="dim", no_wrap=True)

        for item in view.items:
            table.add_row(Text(f"[{item.key}]"), Text(item.description), "›" if item.is_submenu else "")

        # Root menus offer quit, submenus offer back
        if view.is_root:
            table.add_row(Text("[q]", style="red"), Text("Quit", style="red"), "")
        else:
            table.add_row(Text("[b]", style="red"), Text("Back", style="red"), "")
        return table

    def print_menu(self, view: MenuView, breadcrumb: Optional[List[str]] = None):
        self.console.print()
        self.console.print(self.build_menu_table(view, breadcrumb))
        self.console.rule(style="dim")

    def print_last_output(self, messages):
        """Only the newest message is shown in command mode"""
        if not messages:
            return
        self.console.print("[bold]Output:[/bold]")
        for line in messages[-1].splitlines() or [""]:
            self.console.print(f"  {line}", markup=False, highlight=False)
        self.console.rule(style="dim")

    def print_scroll_window(self, lines: List[str], position: int, max_scroll: int, auto_scroll: bool):
        status = "Auto-scroll ON" if auto_scroll else "Auto-scroll OFF"
        body = Text("\n".join(lines)) if lines else Text("(no output)", style="dim")
        self.console.print(Panel(body, title=Text(f"Output [{status}] [{position}/{max_scroll}]"), expand=True))

    def print_mode(self, mode: Mode):
        label, style = self.MODE_STYLES[mode]
        hint = ("Tab scroll mode | Up/Down history | b back | q quit" if mode is Mode.COMMAND
                else "Tab command mode | j/k line | u/d page | g/G top/bottom | a auto-scroll")
        self.console.print(f"[{style}]{label}[/{style}] [dim]{hint}[/dim]")
