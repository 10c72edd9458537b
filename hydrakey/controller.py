# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main controller for defining and running transient menus.

A `HydrakeyController` owns everything a set of menus needs: the menu catalog,
the host command table, the options, the hook manager, the hint display and the
activation state. There are no module-level globals; an application creates one
controller and passes it around, and tests create as many as they like.

Lifecycle of a menu:

    controller = HydrakeyController(hint_display=HintBar())
    undo_menu = controller.define(
        "Undo",
        repeat=[("u", undo), ("r", redo)],
        quit=[("s", "buffer/save")],
    )
    undo_menu.bind(host_bindings, "c-x", "u")   # or: controller.activate("Undo")

    await controller.dispatch("u")   # runs undo, menu stays open
    await controller.dispatch("s")   # runs the "buffer/save" command, menu closes

States are Inactive and Active(menu_id). A menu closes when a quit binding
completes successfully, when the exit key is pressed, when a key with no binding is
pressed, or when `deactivate()` is called. A failing action never closes the menu.
Activating while a menu is open replaces it; menus never stack.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from rich.console import Console
from rich.markup import escape

from hydrakey.catalog import MenuCatalog, build_definition
from hydrakey.command import CommandTable
from hydrakey.console import console
from hydrakey.context import ExecutionContext
from hydrakey.debug import register_debug_hooks
from hydrakey.exceptions import HydrakeyError
from hydrakey.hint_bar import NullHintDisplay
from hydrakey.hook_manager import HookManager, HookType
from hydrakey.key_bindings import TransientKeyBindings
from hydrakey.logger import logger
from hydrakey.options_manager import OptionsManager
from hydrakey.protocols import HintDisplayProtocol
from hydrakey.registry import BindingRegistry, KeyChord, format_chord, normalize_chord
from hydrakey.signals import CancelSignal
from hydrakey.themes import OneColors


@dataclass(frozen=True)
class ActivationState:
    """Snapshot of the controller's state. `current_menu_id` is set iff `active`."""

    active: bool = False
    current_menu_id: str | None = None


class ActivationCommand:
    """
    Opens one specific compiled menu.

    Returned by `HydrakeyController.define`. It keeps the registry it was created
    with, so redefining the menu later does not change what this command opens.
    It is callable with or without a prompt_toolkit `KeyPressEvent`, which makes it
    usable directly as a key binding handler.
    """

    def __init__(self, controller: HydrakeyController, registry: BindingRegistry):
        self.controller = controller
        self.registry = registry
        self.__name__ = self.command_id

    @property
    def name(self) -> str:
        return self.registry.name

    @property
    def menu_id(self) -> str:
        return self.registry.menu_id

    @property
    def command_id(self) -> str:
        return f"{self.registry.menu_id}/activate"

    def __call__(self, event: KeyPressEvent | None = None) -> None:
        self.controller.activate_registry(self.registry)

    def bind(self, key_bindings: KeyBindings, *keys: str, **kwargs: Any) -> None:
        """Bind this command to `keys` in a host `KeyBindings`."""
        key_bindings.add(*keys, **kwargs)(self)

    def __repr__(self) -> str:
        return f"ActivationCommand(name={self.name!r}, menu_id={self.menu_id!r})"


class HydrakeyController:
    """
    Defines menus, activates them, and dispatches keys while one is open.

    Args:
        hint_display (HintDisplayProtocol | None): Shows/hides the active bindings.
            Defaults to `NullHintDisplay`.
        options (OptionsManager | None): Settings (`exit_key`, `never_prompt`,
            `show_hints`).
        commands (CommandTable | None): Host commands that `CommandRef` actions
            resolve against.
        hooks (HookManager | None): Lifecycle hooks.
        logging_hooks (bool): Register the debug logging hooks.
        console (Console | None): Console for user-visible notices.

    Methods:
        define(): Compile and store a menu, returning its `ActivationCommand`.
        activate(): Open a menu by name.
        activate_registry(): Open a specific compiled menu.
        dispatch(): Handle one key chord while a menu is open.
        dispatch_unmatched(): Close the menu for a key it does not bind.
        deactivate(): Close the open menu, if any.
        is_active(): Whether a menu is open.
    """

    def __init__(
        self,
        *,
        hint_display: HintDisplayProtocol | None = None,
        options: OptionsManager | None = None,
        commands: CommandTable | None = None,
        hooks: HookManager | None = None,
        logging_hooks: bool = False,
        console: Console = console,
    ) -> None:
        self.options: OptionsManager = options or OptionsManager()
        self.commands: CommandTable = commands or CommandTable(self.options)
        self.catalog: MenuCatalog = MenuCatalog()
        self.hooks: HookManager = hooks or HookManager()
        self.console: Console = console
        self.hint_display: HintDisplayProtocol = self._resolve_hint_display(
            hint_display
        )
        if logging_hooks:
            register_debug_hooks(self.hooks)
        self._active_registry: BindingRegistry | None = None
        self._session: int = 0
        self._lock = asyncio.Lock()
        self._dispatching: tuple[str, ...] | None = None
        self._replaying: bool = False
        self._replay: tuple[int, tuple[str, ...]] | None = None
        self._transient = TransientKeyBindings(self)

    @staticmethod
    def _resolve_hint_display(
        hint_display: HintDisplayProtocol | None,
    ) -> HintDisplayProtocol:
        if hint_display is None:
            return NullHintDisplay()
        if not isinstance(hint_display, HintDisplayProtocol):
            raise HydrakeyError(
                "hint_display must provide show_bindings() and hide_bindings()."
            )
        return hint_display

    @property
    def key_bindings(self) -> KeyBindings:
        """Bindings to merge (last) into the host application."""
        return self._transient.key_bindings

    @property
    def state(self) -> ActivationState:
        registry = self._active_registry
        if registry is None:
            return ActivationState()
        return ActivationState(active=True, current_menu_id=registry.menu_id)

    @property
    def active_registry(self) -> BindingRegistry | None:
        return self._active_registry

    @property
    def current_menu_id(self) -> str | None:
        return self._active_registry.menu_id if self._active_registry else None

    def is_active(self) -> bool:
        return self._active_registry is not None

    def define(
        self,
        name: str,
        repeat: list[tuple[KeyChord, Any]] | None = None,
        quit: list[tuple[KeyChord, Any]] | None = None,
    ) -> ActivationCommand:
        """
        Compile a menu and store it under `name`, replacing any earlier definition.

        The exit key is read from the options at definition time.

        Returns:
            ActivationCommand: opens this compiled menu. It is also registered in
            the command table as "<menu-id>/activate".

        Raises:
            InvalidMenuError: Empty name or malformed bindings.
        """
        definition = build_definition(name, repeat, quit)
        registry = definition.compile(self.options.get("exit_key") or None)
        self.catalog.store(registry)
        activation = ActivationCommand(self, registry)
        self.commands.add_command(
            activation.command_id,
            activation,
            description=f"Open {registry.name}",
            style=OneColors.CYAN,
            replace=True,
        )
        logger.info(
            "[%s] Defined menu '%s' with %d bindings.",
            registry.menu_id,
            registry.name,
            len(registry),
        )
        return activation

    def activate(self, name: str) -> None:
        """
        Open the menu currently stored under `name`.

        Raises:
            UndefinedMenuError: No menu was defined under `name`.
        """
        self.activate_registry(self.catalog.get(name))

    def activate_registry(self, registry: BindingRegistry) -> None:
        """Install `registry` as the active menu, replacing any open one."""
        previous = self._active_registry
        self._transient.install(registry)
        if previous is not None:
            logger.debug(
                "[%s] Replaced by '%s'.", previous.menu_id, registry.menu_id
            )
        self._active_registry = registry
        self._session += 1
        if (
            previous is not None
            and self._dispatching is not None
            and not self._replaying
            and self._dispatching in registry
        ):
            self._replay = (self._session, self._dispatching)
        self._show_hints(registry)
        context = ExecutionContext(
            name=registry.name,
            menu_id=registry.menu_id,
            action=registry,
            extra={"replaced": previous.menu_id if previous else None},
        )
        self.hooks.trigger_sync(HookType.ON_ACTIVATE, context)
        logger.info("[%s] Menu activated.", registry.menu_id)

    def deactivate(self, reason: str = "external") -> bool:
        """
        Close the active menu.

        Returns:
            bool: False if no menu was active (nothing happens in that case).
        """
        registry = self._active_registry
        if registry is None:
            return False
        self._active_registry = None
        self._replay = None
        self._hide_hints(registry)
        self.console.print(
            f"[{OneColors.COMMENT_GREY}]{escape(registry.menu_id)} menu closed.[/]"
        )
        self._transient.uninstall()
        context = ExecutionContext(
            name=registry.name,
            menu_id=registry.menu_id,
            action=registry,
            deactivated=True,
            extra={"reason": reason},
        )
        self.hooks.trigger_sync(HookType.ON_DEACTIVATE, context)
        logger.info("[%s] Menu deactivated (%s).", registry.menu_id, reason)
        return True

    def _show_hints(self, registry: BindingRegistry) -> None:
        if not self.options.get("show_hints", True):
            return
        try:
            self.hint_display.show_bindings(registry.menu_id, registry)
        except Exception as error:
            logger.warning(
                "[%s] Hint display failed to show bindings: %s",
                registry.menu_id,
                error,
            )

    def _hide_hints(self, registry: BindingRegistry) -> None:
        try:
            self.hint_display.hide_bindings()
        except Exception as error:
            logger.warning(
                "[%s] Hint display failed to hide bindings: %s",
                registry.menu_id,
                error,
            )

    def dispatch_unmatched(self, chord: KeyChord) -> ExecutionContext | None:
        """Close the active menu because `chord` is not one of its bindings."""
        registry = self._active_registry
        if registry is None:
            return None
        keys = normalize_chord(chord)
        context = ExecutionContext(
            name="unmatched",
            menu_id=registry.menu_id,
            chord=keys,
            extra={"reason": "unmatched"},
        )
        context.deactivated = self.deactivate(reason="unmatched")
        return context

    async def dispatch(self, chord: KeyChord) -> ExecutionContext | None:
        """
        Handle one key chord against the active menu.

        Returns:
            ExecutionContext | None: What happened, or None if no menu was active.
            A failed action is reported and recorded in `context.exception`; it is
            not raised.
        """
        keys = normalize_chord(chord)
        async with self._lock:
            context = await self._dispatch(keys)
            while self._replay is not None:
                session, replay_keys = self._replay
                self._replay = None
                if session != self._session:
                    break
                logger.debug("Replaying '%s'.", format_chord(replay_keys))
                self._replaying = True
                try:
                    await self._dispatch(replay_keys)
                finally:
                    self._replaying = False
            return context

    async def _dispatch(self, keys: tuple[str, ...]) -> ExecutionContext | None:
        registry = self._active_registry
        if registry is None:
            logger.debug("Ignoring '%s': no active menu.", format_chord(keys))
            return None

        bound = registry.bindings.get(keys)
        if bound is None:
            return self.dispatch_unmatched(keys)

        context = ExecutionContext(
            name=bound.name, menu_id=registry.menu_id, chord=keys, action=bound
        )
        if bound.is_exit:
            context.extra["reason"] = "exit"
            context.deactivated = self.deactivate(reason="exit")
            return context

        session = self._session
        self._dispatching = keys
        context.start_timer()
        try:
            await self.hooks.trigger(HookType.BEFORE, context)
            context.result = await bound.invoke(self.commands)
            await self.hooks.trigger(HookType.ON_SUCCESS, context)
        except Exception as error:
            context.exception = error
            self._handle_action_error(context, error)
            try:
                await self.hooks.trigger(HookType.ON_ERROR, context)
            except Exception as hook_error:
                logger.warning(
                    "[%s] on_error hooks failed for '%s': %s",
                    registry.menu_id,
                    bound.name,
                    hook_error,
                )
        except CancelSignal as signal:
            context.exception = signal
            logger.info("[%s] '%s' cancelled.", registry.menu_id, bound.name)
        finally:
            self._dispatching = None
            context.stop_timer()
            await self.hooks.trigger(HookType.AFTER, context)
            await self.hooks.trigger(HookType.ON_TEARDOWN, context)

        if context.success and bound.auto_close and session == self._session:
            context.extra["reason"] = "quit"
            context.deactivated = self.deactivate(reason="quit")
        logger.debug(context.to_log_line())
        return context

    def _handle_action_error(self, context: ExecutionContext, error: Exception) -> None:
        """Report a failed action; the menu stays open."""
        chord = format_chord(context.chord or ())
        logger.debug(
            "[%s] '%s' (%s) failed with error: %s",
            context.menu_id,
            chord,
            context.name,
            error,
            exc_info=True,
        )
        self.console.print(
            f"[{OneColors.DARK_RED}]❌ {escape(f'[{context.menu_id}] {chord!r}')} → "
            f"{escape(context.name)} failed:[/] {escape(str(error))}"
        )
