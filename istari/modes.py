#!/usr/bin/env python3
"""
Istari Modes
Command mode routes keys to the menu; scroll mode routes them to the output
viewport. The mode is advisory: hosts consult it before forwarding keys.
"""

from enum import Enum


class Mode(Enum):
    COMMAND = "command"
    SCROLL = "scroll"


class ModeController:
    """Two-state machine, starting in command mode"""

    def __init__(self, mode: Mode = Mode.COMMAND):
        self._mode = mode

    @property
    def mode(self) -> Mode:
        return self._mode

    def toggle(self) -> Mode:
        self._mode = Mode.SCROLL if self._mode is Mode.COMMAND else Mode.COMMAND
        return self._mode

    def set(self, mode: Mode):
        self._mode = Mode(mode)

    @property
    def is_command(self) -> bool:
        return self._mode is Mode.COMMAND
