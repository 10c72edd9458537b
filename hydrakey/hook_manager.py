# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `HookManager` and `HookType` used by Hydrakey to run callbacks around
dispatched actions and menu lifecycle transitions.

Key Components:
- HookType: Enum of supported lifecycle stages
- HookManager: Registers and triggers hooks
- Hook: Union of sync and async callables accepting an `ExecutionContext`

Usage:
    hooks = HookManager()
    hooks.register(HookType.ON_ACTIVATE, announce_menu)
    hooks.register("error", log_failure)
"""
from __future__ import annotations

import inspect
from enum import Enum
from typing import Awaitable, Callable, Union

from hydrakey.context import ExecutionContext
from hydrakey.exceptions import InvalidHookError
from hydrakey.logger import logger

Hook = Union[
    Callable[[ExecutionContext], None], Callable[[ExecutionContext], Awaitable[None]]
]


class HookType(Enum):
    """
    Lifecycle phases that can be intercepted with user-defined callbacks.

    Members:
        BEFORE: Run before a bound action is invoked.
        ON_SUCCESS: Run after the action completes.
        ON_ERROR: Run when the action raises.
        AFTER: Run after success or failure (always runs).
        ON_TEARDOWN: Run at the very end of a dispatch.
        ON_ACTIVATE: Run after a menu becomes active.
        ON_DEACTIVATE: Run after a menu is closed.

    Aliases:
        "success" → "on_success"
        "error" → "on_error"
        "teardown" → "on_teardown"
        "activate" → "on_activate"
        "deactivate" → "on_deactivate"
    """

    BEFORE = "before"
    ON_SUCCESS = "on_success"
    ON_ERROR = "on_error"
    AFTER = "after"
    ON_TEARDOWN = "on_teardown"
    ON_ACTIVATE = "on_activate"
    ON_DEACTIVATE = "on_deactivate"

    @classmethod
    def choices(cls) -> list[HookType]:
        """Return a list of all hook type choices."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "success": "on_success",
            "error": "on_error",
            "teardown": "on_teardown",
            "activate": "on_activate",
            "deactivate": "on_deactivate",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> HookType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


class HookManager:
    """
    Manages lifecycle hooks for a controller or a host command.

    Methods:
        register(hook_type, hook): Register a callable for a given HookType.
        clear(hook_type): Remove hooks for one or all lifecycle stages.
        trigger(hook_type, context): Execute all hooks of a given type.
    """

    def __init__(self) -> None:
        self._hooks: dict[HookType, list[Hook]] = {
            hook_type: [] for hook_type in HookType
        }

    def register(self, hook_type: HookType | str, hook: Hook):
        """
        Register a new hook for a given lifecycle phase.

        Raises:
            ValueError: If the hook type is invalid.
            InvalidHookError: If the hook is not callable.
        """
        hook_type = HookType(hook_type)
        if not callable(hook):
            raise InvalidHookError(f"Hook for '{hook_type}' must be callable: {hook!r}")
        self._hooks[hook_type].append(hook)

    def clear(self, hook_type: HookType | None = None):
        """Clear registered hooks for one or all hook types."""
        if hook_type:
            self._hooks[hook_type] = []
        else:
            for ht in self._hooks:
                self._hooks[ht] = []

    async def trigger(self, hook_type: HookType, context: ExecutionContext):
        """
        Invoke all hooks registered for a given lifecycle phase.

        Raises:
            Exception: Re-raises the original context.exception if a hook fails during
                       ON_ERROR. Other hook exceptions are logged and skipped.
        """
        if hook_type not in self._hooks:
            raise ValueError(f"Unsupported hook type: {hook_type}")
        for hook in self._hooks[hook_type]:
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(context)
                else:
                    hook(context)
            except Exception as hook_error:
                logger.warning(
                    "[Hook:%s] raised an exception during '%s' for '%s': %s",
                    getattr(hook, "__name__", repr(hook)),
                    hook_type,
                    context.name,
                    hook_error,
                )
                if hook_type == HookType.ON_ERROR and isinstance(
                    context.exception, Exception
                ):
                    raise context.exception from hook_error

    def trigger_sync(self, hook_type: HookType, context: ExecutionContext):
        """
        Invoke the synchronous hooks of a phase from non-async code.

        Activation and deactivation are synchronous transitions, so coroutine hooks
        registered for them are skipped with a warning.
        """
        for hook in self._hooks[hook_type]:
            if inspect.iscoroutinefunction(hook):
                logger.warning(
                    "[Hook:%s] is async and cannot run during '%s'; skipped.",
                    hook.__name__,
                    hook_type,
                )
                continue
            try:
                hook(context)
            except Exception as hook_error:
                logger.warning(
                    "[Hook:%s] raised an exception during '%s' for '%s': %s",
                    getattr(hook, "__name__", repr(hook)),
                    hook_type,
                    context.name,
                    hook_error,
                )

    def __str__(self) -> str:
        """Return a formatted string of registered hooks grouped by hook type."""

        def format_hook_list(hooks: list[Hook]) -> str:
            return ", ".join(h.__name__ for h in hooks) if hooks else "—"

        lines = ["<HookManager>"]
        for hook_type in HookType:
            hook_list = self._hooks.get(hook_type, [])
            lines.append(f"  {hook_type.value}: {format_hook_list(hook_list)}")
        return "\n".join(lines)
