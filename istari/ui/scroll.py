#!/usr/bin/env python3
"""
Output viewport scrolling for scroll mode
"""

from enum import Enum
from typing import List, Sequence


class ScrollDirection(Enum):
    LINE_UP = "line_up"
    LINE_DOWN = "line_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    TOP = "top"
    BOTTOM = "bottom"


# vim-style keys accepted in scroll mode
SCROLL_KEYS = {
    "k": ScrollDirection.LINE_UP,
    "j": ScrollDirection.LINE_DOWN,
    "u": ScrollDirection.PAGE_UP,
    "d": ScrollDirection.PAGE_DOWN,
    "g": ScrollDirection.TOP,
    "G": ScrollDirection.BOTTOM,
}
AUTO_SCROLL_KEY = "a"


def split_lines(messages: Sequence[str]) -> List[str]:
    """Flatten messages into display lines; one message may span several"""
    lines = []
    for message in messages:
        lines.extend(message.splitlines() or [""])
    return lines


class ScrollState:
    """Top line of the output viewport plus the auto-scroll toggle"""

    def __init__(self, page_size: int = 10, auto_scroll: bool = True):
        self.position = 0
        self.page_size = page_size
        self.auto_scroll = auto_scroll

    @staticmethod
    def max_scroll(content_height: int, viewport_height: int) -> int:
        return max(content_height - viewport_height, 0)

    def scroll(self, direction: ScrollDirection, content_height: int, viewport_height: int):
        """Move the viewport; scrolling up turns auto-scroll off, reaching the bottom turns it on"""
        bottom = self.max_scroll(content_height, viewport_height)

        if direction is ScrollDirection.LINE_UP:
            if self.position > 0:
                self.position -= 1
                self.auto_scroll = False
        elif direction is ScrollDirection.LINE_DOWN:
            self.position = min(self.position + 1, bottom)
        elif direction is ScrollDirection.PAGE_UP:
            self.position = max(self.position - self.page_size, 0)
            self.auto_scroll = False
        elif direction is ScrollDirection.PAGE_DOWN:
            self.position = min(self.position + self.page_size, bottom)
        elif direction is ScrollDirection.TOP:
            self.position = 0
            self.auto_scroll = False
        elif direction is ScrollDirection.BOTTOM:
            self.position = bottom
            self.auto_scroll = True

        if direction in (ScrollDirection.LINE_DOWN, ScrollDirection.PAGE_DOWN) and self.position >= bottom:
            self.auto_scroll = True

    def toggle_auto_scroll(self, content_height: int, viewport_height: int):
        self.auto_scroll = not self.auto_scroll
        if self.auto_scroll:
            self.position = self.max_scroll(content_height, viewport_height)

    def update_auto_scroll(self, has_new_output: bool, content_height: int, viewport_height: int):
        """Follow new output when auto-scroll is on; always keep the position in range"""
        bottom = self.max_scroll(content_height, viewport_height)
        if self.auto_scroll and has_new_output:
            self.position = bottom
        self.position = min(self.position, bottom)

    def apply_key(self, key: str, content_height: int, viewport_height: int) -> bool:
        """
        Apply one scroll-mode key

        Returns:
            True if the key was a scroll directive
        """
        if key == AUTO_SCROLL_KEY:
            self.toggle_auto_scroll(content_height, viewport_height)
            return True
        direction = SCROLL_KEYS.get(key)
        if direction is None:
            return False
        self.scroll(direction, content_height, viewport_height)
        return True

    def window(self, lines: Sequence[str], viewport_height: int) -> List[str]:
        """Lines currently visible in a viewport of ``viewport_height`` rows"""
        self.position = min(self.position, self.max_scroll(len(lines), viewport_height))
        return list(lines[self.position:self.position + viewport_height])
