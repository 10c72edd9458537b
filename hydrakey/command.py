# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the host-side command table that `CommandRef` actions resolve against.

A `Command` is a named, invocable unit of the host application, the same kind of
thing a user could bind directly to a key. Invoking it goes through the host's
interactive path:

- Optional confirmation prompt (skipped when `never_prompt` is set)
- Interactive argument prompts, one per entry in `prompts`
- Hook lifecycle (before, on_success, on_error, after, on_teardown)
- Execution timing

`CommandTable` maps command ids to commands. Menu activation commands created by
`HydrakeyController.define` are registered here too (as "<menu-id>/activate"), so a
binding in one menu can open another menu by reference.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from prompt_toolkit.formatted_text import FormattedText
from pydantic import BaseModel, ConfigDict, Field, field_validator

from hydrakey.context import ExecutionContext
from hydrakey.exceptions import CommandAlreadyExistsError, InvalidActionError
from hydrakey.hook_manager import HookManager, HookType
from hydrakey.logger import logger
from hydrakey.options_manager import OptionsManager
from hydrakey.prompt_utils import ask_async, confirm_async, should_prompt_user
from hydrakey.signals import CancelSignal
from hydrakey.themes import OneColors
from hydrakey.utils import ensure_async
from hydrakey.validators import required_validator


class Command(BaseModel):
    """
    A host command that menu bindings can reference by id.

    Attributes:
        id (str): Unique command id used by `CommandRef`.
        description (str): Short description shown in hints and confirmations.
        action (Callable): Sync or async callable run by the command.
        args (tuple): Static positional arguments.
        kwargs (dict): Static keyword arguments.
        prompts (dict[str, str]): Keyword arguments collected interactively;
            maps the argument name to its prompt message.
        confirm (bool): Whether to require confirmation before executing.
        confirm_message (str): Custom confirmation prompt.
        hooks (HookManager): Hook manager for lifecycle events.
        options_manager (OptionsManager): Source of `never_prompt`.
    """

    id: str
    description: str = ""
    action: Callable[..., Any] | Callable[..., Awaitable[Any]]
    args: tuple = ()
    kwargs: dict[str, Any] = Field(default_factory=dict)
    prompts: dict[str, str] = Field(default_factory=dict)
    confirm: bool = False
    confirm_message: str = "Are you sure?"
    style: str = OneColors.WHITE
    hooks: HookManager = Field(default_factory=HookManager)
    options_manager: OptionsManager = Field(default_factory=OptionsManager)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("action", mode="before")
    @classmethod
    def wrap_callable_as_async(cls, action: Any) -> Any:
        if callable(action):
            return ensure_async(action)
        raise InvalidActionError(f"Command action must be callable, got {action!r}")

    def model_post_init(self, _: Any) -> None:
        if not self.description:
            self.description = self.id

    @property
    def confirmation_prompt(self) -> FormattedText:
        """Generate a styled prompt_toolkit FormattedText confirmation message."""
        if self.confirm_message and self.confirm_message != "Are you sure?":
            return FormattedText([("class:confirm", self.confirm_message)])
        return FormattedText(
            [
                (OneColors.WHITE, "Confirm execution of "),
                (OneColors.BLUE_b, f"{self.id} — {self.description} "),
            ]
        )

    async def collect_arguments(self) -> dict[str, Any]:
        """Ask for every interactive argument that has no static value."""
        collected: dict[str, Any] = {}
        if self.options_manager.get("never_prompt", False):
            return collected
        for name, message in self.prompts.items():
            if name in self.kwargs:
                continue
            collected[name] = await ask_async(message, validator=required_validator(name))
        return collected

    async def __call__(self, *args, **kwargs) -> Any:
        """Run the command through prompts, hooks, and timing."""
        if should_prompt_user(confirm=self.confirm, options=self.options_manager):
            if not await confirm_async(self.confirmation_prompt):
                logger.info("[Command:%s] Cancelled by user.", self.id)
                raise CancelSignal(f"[Command:{self.id}] Cancelled by confirmation.")

        prompted = await self.collect_arguments()
        combined_args = args + self.args
        combined_kwargs = {**self.kwargs, **prompted, **kwargs}
        context = ExecutionContext(
            name=self.description,
            action=self,
            extra={"args": combined_args, "kwargs": combined_kwargs},
        )
        context.start_timer()
        try:
            await self.hooks.trigger(HookType.BEFORE, context)
            result = await self.action(*combined_args, **combined_kwargs)
            context.result = result
            await self.hooks.trigger(HookType.ON_SUCCESS, context)
            return context.result
        except Exception as error:
            context.exception = error
            await self.hooks.trigger(HookType.ON_ERROR, context)
            raise error
        finally:
            context.stop_timer()
            await self.hooks.trigger(HookType.AFTER, context)
            await self.hooks.trigger(HookType.ON_TEARDOWN, context)
            logger.debug(context.to_log_line())

    def __str__(self) -> str:
        return f"Command(id='{self.id}', description='{self.description}')"


class CommandTable:
    """
    Registry of host commands, keyed by id.

    Methods:
        add_command(): Build and register a command from a callable.
        register(): Register an existing `Command`.
        get(): Look up a command by id (None if absent).
    """

    def __init__(self, options_manager: OptionsManager | None = None) -> None:
        self.options_manager = options_manager or OptionsManager()
        self.commands: dict[str, Command] = {}

    def register(self, command: Command, *, replace: bool = False) -> Command:
        if not isinstance(command, Command):
            raise InvalidActionError("command must be an instance of Command.")
        if command.id in self.commands and not replace:
            raise CommandAlreadyExistsError(
                f"Command id '{command.id}' is already registered."
            )
        command.options_manager = self.options_manager
        self.commands[command.id] = command
        logger.debug("Registered command '%s'.", command.id)
        return command

    def add_command(
        self,
        command_id: str,
        action: Callable[..., Any],
        *,
        description: str = "",
        args: tuple = (),
        kwargs: dict[str, Any] | None = None,
        prompts: dict[str, str] | None = None,
        confirm: bool = False,
        confirm_message: str = "Are you sure?",
        style: str = OneColors.WHITE,
        hooks: HookManager | None = None,
        replace: bool = False,
    ) -> Command:
        """Adds a command to the table, preventing duplicates unless `replace`."""
        command = Command(
            id=command_id,
            description=description,
            action=action,
            args=args,
            kwargs=kwargs or {},
            prompts=prompts or {},
            confirm=confirm,
            confirm_message=confirm_message,
            style=style,
            hooks=hooks or HookManager(),
            options_manager=self.options_manager,
        )
        return self.register(command, replace=replace)

    def get(self, command_id: str) -> Command | None:
        return self.commands.get(command_id)

    def __contains__(self, command_id: object) -> bool:
        return command_id in self.commands

    def __len__(self) -> int:
        return len(self.commands)
