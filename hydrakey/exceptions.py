# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Hydrakey.

Exception Hierarchy:
- HydrakeyError
    ├── InvalidActionError
    ├── InvalidHookError
    ├── InvalidMenuError
    ├── UndefinedMenuError
    └── CommandAlreadyExistsError

Duplicate key chords inside one menu are deliberately not an error: the last
binding registered for a chord wins.
"""


class HydrakeyError(Exception):
    """Base exception for Hydrakey."""


class InvalidActionError(HydrakeyError):
    """Raised when a bound action is neither a known command nor a callable."""


class InvalidHookError(HydrakeyError):
    """Raised when a hook is not callable."""


class InvalidMenuError(HydrakeyError):
    """Raised when a menu definition is malformed (e.g. an empty name)."""


class UndefinedMenuError(HydrakeyError):
    """Raised when activating a menu name that was never defined."""


class CommandAlreadyExistsError(HydrakeyError):
    """Raised when a command id is already registered in the command table."""
