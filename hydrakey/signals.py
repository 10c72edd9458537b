# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Flow control signals used by Hydrakey.

Signals inherit from `FlowSignal`, a `BaseException` subclass, so they bypass
ordinary `except Exception` blocks.

Signals:
- QuitSignal: Terminate the interactive session.
- CancelSignal: Cancel the current command (e.g. a declined confirmation).
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Hydrakey."""


class QuitSignal(FlowSignal):
    """Raised to signal an immediate exit from the interactive session."""

    def __init__(self, message: str = "Quit signal received."):
        super().__init__(message)


class CancelSignal(FlowSignal):
    """Raised to cancel the current command."""

    def __init__(self, message: str = "Cancel signal received."):
        super().__init__(message)
