"""
Tests for the exceptions module in Istari
"""

import pytest
from istari.exceptions import (
    IstariException, ValidationError, DuplicateKeyError, ReservedKeyError,
    CyclicMenuError, ConfigurationError, HandlerError, SessionPoisonedError,
)


def test_istari_exception():
    """Test IstariException functionality"""
    with pytest.raises(IstariException) as exc_info:
        raise IstariException(code="TEST_ERROR", message="Test error message", details={"a": 1})

    error = exc_info.value
    assert error.code == "TEST_ERROR"
    assert error.message == "Test error message"
    assert error.to_dict() == {"error": "TEST_ERROR", "message": "Test error message", "details": {"a": 1}}


def test_default_code():
    error = IstariException("boom")
    assert error.code == "UNKNOWN_ERROR"
    assert error.details == {}


def test_duplicate_key_error():
    """Duplicate keys report the key and the menu title"""
    error = DuplicateKeyError("x", "Main")
    assert isinstance(error, ValidationError)
    assert error.code == "DUPLICATE_KEY"
    assert error.key == "x"
    assert error.menu_title == "Main"
    assert str(error) == "Duplicate command key 'x' in menu 'Main'"
    assert error.details == {"key": "x", "menu": "Main"}


def test_reserved_key_error():
    error = ReservedKeyError("q", "Settings")
    assert isinstance(error, ValidationError)
    assert error.code == "RESERVED_KEY"
    assert str(error) == "Reserved command key 'q' in menu 'Settings'"


def test_cyclic_menu_error():
    error = CyclicMenuError("loop", "Main")
    assert isinstance(error, ValidationError)
    assert error.code == "CYCLIC_MENU"
    assert "loop" in str(error)


def test_configuration_error():
    error = ConfigurationError("bad value", "session.history_size")
    assert error.code == "CONFIG_ERROR"
    assert error.details["config_key"] == "session.history_size"


def test_handler_and_poison_errors():
    handler_error = HandlerError("Action 'x' failed: boom", key="x", menu_title="Main")
    assert handler_error.code == "HANDLER_ERROR"
    assert handler_error.details == {"key": "x", "menu": "Main"}

    poisoned = SessionPoisonedError(cause=handler_error.message)
    assert poisoned.code == "SESSION_POISONED"
    assert poisoned.details["cause"] == "Action 'x' failed: boom"
