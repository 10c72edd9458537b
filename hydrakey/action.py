# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""action.py

Actions that menu bindings run, and the `BoundAction` wrapper stored per chord.

An action is one of two kinds:

- `CommandRef`: the id of a host `Command`, resolved through a `CommandTable` at
  invocation time and run through the command's interactive path (confirmation,
  argument prompts, hooks).
- `Callback`: a zero-argument callable (sync or async) invoked directly.

`coerce_action` turns raw user input into one of these (`str` → `CommandRef`,
callable → `Callback`). Anything else is kept as-is so the problem is reported when
the key is pressed, as an `InvalidActionError` naming the bad value.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from hydrakey.command import CommandTable
from hydrakey.exceptions import InvalidActionError
from hydrakey.utils import ensure_async


@dataclass(frozen=True)
class CommandRef:
    """Reference to a host command by id."""

    command_id: str

    @property
    def name(self) -> str:
        return self.command_id


@dataclass(frozen=True)
class Callback:
    """A callable invoked directly with no arguments."""

    fn: Callable[[], Any] | Callable[[], Awaitable[Any]]

    @property
    def name(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))


Action = Union[CommandRef, Callback]


def coerce_action(value: Any) -> Action | Any:
    if isinstance(value, (CommandRef, Callback)):
        return value
    if isinstance(value, str):
        return CommandRef(value)
    if callable(value):
        return Callback(value)
    return value


def action_name(action: Any) -> str:
    if isinstance(action, (CommandRef, Callback)):
        return action.name
    return repr(action)


@dataclass(frozen=True)
class BoundAction:
    """
    An action bound to a chord inside one menu.

    Attributes:
        action: The `CommandRef`, `Callback`, or (invalid) raw value to run.
        auto_close (bool): Close the menu after the action completes successfully.
        is_exit (bool): The implicit exit binding; closes the menu without running
            anything.
    """

    action: Any = None
    auto_close: bool = False
    is_exit: bool = False

    @property
    def name(self) -> str:
        if self.is_exit:
            return "exit"
        return action_name(self.action)

    async def invoke(self, commands: CommandTable) -> Any:
        """Run the wrapped action.

        Raises:
            InvalidActionError: The reference does not resolve, or the value is
                neither a command reference nor a callable.
        """
        if self.is_exit:
            return None
        action = self.action
        if isinstance(action, CommandRef):
            command = commands.get(action.command_id)
            if command is None:
                raise InvalidActionError(
                    f"No command registered under '{action.command_id}'."
                )
            return await command()
        if isinstance(action, Callback):
            return await ensure_async(action.fn)()
        raise InvalidActionError(
            f"Action must be a command id or a callable, got {action!r}."
        )


EXIT_BINDING = BoundAction(auto_close=True, is_exit=True)


def wrap(action: Any, auto_close: bool) -> BoundAction:
    """Wrap a raw action into a `BoundAction`."""
    return BoundAction(action=coerce_action(action), auto_close=auto_close)
