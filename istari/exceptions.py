#!/usr/bin/env python3
"""
Istari Exception Hierarchy
Centralized exception handling for menu construction and dispatch
"""


class IstariException(Exception):
    """Base exception for all Istari errors"""
    def __init__(self, message, code=None, details=None):
        self.message = message
        self.code = code or "UNKNOWN_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        """Convert exception to dict for logging/output"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(IstariException):
    """Raised when a menu tree fails structural validation"""
    def __init__(self, message, key=None, menu_title=None, code="VALIDATION_ERROR"):
        self.key = key
        self.menu_title = menu_title
        details = {}
        if key is not None:
            details["key"] = key
        if menu_title is not None:
            details["menu"] = menu_title
        super().__init__(message, code, details)


class DuplicateKeyError(ValidationError):
    """Raised when two items of one menu share a key"""
    def __init__(self, key, menu_title):
        super().__init__(
            f"Duplicate command key '{key}' in menu '{menu_title}'",
            key=key, menu_title=menu_title, code="DUPLICATE_KEY"
        )


class ReservedKeyError(ValidationError):
    """Raised when an item uses a reserved navigation key"""
    def __init__(self, key, menu_title):
        super().__init__(
            f"Reserved command key '{key}' in menu '{menu_title}'",
            key=key, menu_title=menu_title, code="RESERVED_KEY"
        )


class CyclicMenuError(ValidationError):
    """Raised when a submenu contains one of its own ancestors"""
    def __init__(self, key, menu_title):
        super().__init__(
            f"Submenu '{key}' in menu '{menu_title}' refers back to one of its ancestors",
            key=key, menu_title=menu_title, code="CYCLIC_MENU"
        )


class ConfigurationError(IstariException):
    """Raised when configuration is invalid or missing"""
    def __init__(self, message, config_key=None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, "CONFIG_ERROR", details)


class HandlerError(IstariException):
    """Raised when an action or tick handler fails"""
    def __init__(self, message, key=None, menu_title=None):
        details = {}
        if key:
            details["key"] = key
        if menu_title:
            details["menu"] = menu_title
        super().__init__(message, "HANDLER_ERROR", details)


class ActionTimeoutError(IstariException):
    """Raised when an async action does not complete in time"""
    def __init__(self, message, timeout=None, key=None):
        details = {}
        if timeout:
            details["timeout_seconds"] = timeout
        if key:
            details["key"] = key
        super().__init__(message, "TIMEOUT_ERROR", details)


class SessionPoisonedError(IstariException):
    """Raised when a session is used after a handler fault"""
    def __init__(self, message="Session is unusable after a handler failure", cause=None):
        details = {"cause": cause} if cause else {}
        super().__init__(message, "SESSION_POISONED", details)
