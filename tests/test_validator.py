"""
Tests for menu tree validation
"""

import pytest
from istari.exceptions import CyclicMenuError, DuplicateKeyError, ReservedKeyError, ValidationError
from istari.menu import RESERVED_KEYS, new_menu
from istari.validator import validate


def noop(state, params):
    return None


def test_valid_tree_passes():
    root = new_menu("Main")
    settings = new_menu("Settings")
    settings.add_action("r", "Reset", noop)
    root.add_action("inc", "Increment", noop)
    root.add_submenu("s", "Settings", settings)

    validate(root)


def test_empty_menu_passes():
    validate(new_menu("Empty"))


@pytest.mark.parametrize("key", RESERVED_KEYS + ("Q", "BACK"))
def test_reserved_keys_are_rejected(key):
    root = new_menu("Main")
    root.add_action(key, "Reserved", noop)

    with pytest.raises(ReservedKeyError) as exc_info:
        validate(root)
    assert exc_info.value.key == key
    assert exc_info.value.menu_title == "Main"


def test_case_insensitive_duplicates_are_rejected():
    root = new_menu("Main")
    root.add_action("x", "Lower", noop)
    root.add_action("X", "Upper", noop)

    with pytest.raises(DuplicateKeyError) as exc_info:
        validate(root)
    assert exc_info.value.key == "X"
    assert exc_info.value.menu_title == "Main"


def test_duplicate_between_action_and_submenu():
    root = new_menu("Main")
    root.add_action("s", "Action", noop)
    root.add_submenu("s", "Submenu", new_menu("Sub"))

    with pytest.raises(DuplicateKeyError):
        validate(root)


def test_same_key_in_different_menus_is_fine():
    root = new_menu("Main")
    child = new_menu("Child")
    child.add_action("x", "Child x", noop)
    root.add_action("x", "Root x", noop)
    root.add_submenu("c", "Child", child)

    validate(root)


def test_nested_problem_reports_offending_menu():
    root = new_menu("Main")
    level1 = new_menu("Level 1")
    level2 = new_menu("Level 2")
    level2.add_action("b", "Reserved deep down", noop)
    level1.add_submenu("two", "Level 2", level2)
    root.add_submenu("one", "Level 1", level1)

    with pytest.raises(ReservedKeyError) as exc_info:
        validate(root)
    assert exc_info.value.menu_title == "Level 2"
    assert exc_info.value.key == "b"


def test_reserved_checked_before_duplicate():
    root = new_menu("Main")
    root.add_action("q", "Quit?", noop)
    root.add_action("q", "Quit again", noop)

    with pytest.raises(ReservedKeyError):
        validate(root)


def test_shared_submenu_is_not_a_cycle():
    shared = new_menu("Shared")
    shared.add_action("x", "X", noop)
    root = new_menu("Main")
    root.add_submenu("a", "Shared A", shared)
    root.add_submenu("c", "Shared C", shared)

    validate(root)


def test_cycles_are_rejected():
    root = new_menu("Main")
    child = new_menu("Child")
    child.add_submenu("up", "Back to main", root)
    root.add_submenu("c", "Child", child)

    with pytest.raises(CyclicMenuError) as exc_info:
        validate(root)
    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.menu_title == "Child"


def test_self_reference_is_rejected():
    root = new_menu("Main")
    root.add_submenu("me", "Myself", root)

    with pytest.raises(CyclicMenuError):
        validate(root)
