"""
Tests for the scroll-mode viewport
"""

import pytest
from istari.ui.scroll import ScrollDirection, ScrollState, split_lines


@pytest.fixture
def scroll():
    # 30 lines of content in a 10 line viewport; bottom is 20
    state = ScrollState(page_size=5)
    state.position = 20
    return state


def test_max_scroll():
    assert ScrollState.max_scroll(30, 10) == 20
    assert ScrollState.max_scroll(5, 10) == 0


def test_line_up_disables_auto_scroll(scroll):
    scroll.scroll(ScrollDirection.LINE_UP, 30, 10)
    assert scroll.position == 19
    assert not scroll.auto_scroll


def test_line_up_at_top_is_noop():
    state = ScrollState()
    state.scroll(ScrollDirection.LINE_UP, 30, 10)
    assert state.position == 0
    assert state.auto_scroll


def test_reaching_bottom_enables_auto_scroll(scroll):
    scroll.scroll(ScrollDirection.PAGE_UP, 30, 10)
    assert scroll.position == 15
    assert not scroll.auto_scroll

    scroll.scroll(ScrollDirection.LINE_DOWN, 30, 10)
    assert scroll.position == 16
    assert not scroll.auto_scroll

    scroll.scroll(ScrollDirection.PAGE_DOWN, 30, 10)
    assert scroll.position == 20
    assert scroll.auto_scroll


def test_page_moves_are_clamped(scroll):
    scroll.position = 2
    scroll.scroll(ScrollDirection.PAGE_UP, 30, 10)
    assert scroll.position == 0


def test_top_and_bottom(scroll):
    scroll.scroll(ScrollDirection.TOP, 30, 10)
    assert scroll.position == 0
    assert not scroll.auto_scroll

    scroll.scroll(ScrollDirection.BOTTOM, 30, 10)
    assert scroll.position == 20
    assert scroll.auto_scroll


def test_toggle_auto_scroll_jumps_to_bottom():
    state = ScrollState(auto_scroll=False)
    state.toggle_auto_scroll(30, 10)
    assert state.auto_scroll
    assert state.position == 20

    state.toggle_auto_scroll(30, 10)
    assert not state.auto_scroll
    assert state.position == 20


def test_update_follows_new_output_only_with_auto_scroll():
    state = ScrollState()
    state.update_auto_scroll(True, 30, 10)
    assert state.position == 20

    state.scroll(ScrollDirection.LINE_UP, 30, 10)
    state.update_auto_scroll(True, 40, 10)
    assert state.position == 19


def test_update_clamps_after_content_shrinks(scroll):
    scroll.auto_scroll = False
    scroll.update_auto_scroll(False, 12, 10)
    assert scroll.position == 2


@pytest.mark.parametrize("key, position", [("k", 19), ("u", 15), ("g", 0), ("G", 20), ("j", 20)])
def test_apply_key(scroll, key, position):
    assert scroll.apply_key(key, 30, 10)
    assert scroll.position == position


def test_apply_unknown_key(scroll):
    assert not scroll.apply_key("x", 30, 10)
    assert scroll.position == 20


def test_apply_auto_scroll_key(scroll):
    assert scroll.apply_key("a", 30, 10)
    assert not scroll.auto_scroll


def test_window():
    lines = [f"line {i}" for i in range(30)]
    state = ScrollState()
    state.position = 25

    visible = state.window(lines, 10)
    assert state.position == 20
    assert visible[0] == "line 20"
    assert len(visible) == 10


def test_split_lines():
    assert split_lines(["one", "two\nthree", ""]) == ["one", "two", "three", ""]
