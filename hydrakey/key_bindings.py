# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
prompt_toolkit key bindings that intercept input while a menu is active.

`TransientKeyBindings` owns a single `KeyBindings` object. While a menu is open it
holds one eager `<any>` binding; otherwise it is empty. An eager binding is chosen
over every non-eager binding of the host, exact ones (Enter, `c-a`, a `c-x` prefix)
included, so the open menu sees each key press first. Merge it into the host's
bindings:

    session = PromptSession(
        key_bindings=merge_key_bindings([host_bindings, controller.key_bindings]),
    )

Each key press is resolved against the active registry:

- keys that start a longer chord of the menu are held until the chord is complete;
- a complete chord is dispatched through the controller as a background task, and
  the controller's lock keeps dispatches in arrival order;
- a chord the menu does not bind closes the menu and its keys are fed back to the
  key processor, so the host handles them as if no menu had been open.

Terminal reports (cursor position responses, mouse events) are never intercepted.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

from prompt_toolkit.application.current import get_app
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPress, KeyPressEvent
from prompt_toolkit.keys import Keys

from hydrakey.context import ExecutionContext
from hydrakey.logger import logger
from hydrakey.registry import BindingRegistry

if TYPE_CHECKING:
    from hydrakey.controller import HydrakeyController

PASSIVE_KEYS = frozenset(
    {
        Keys.CPRResponse,
        Keys.Vt100MouseEvent,
        Keys.WindowsMouseEvent,
        Keys.ScrollUp,
        Keys.ScrollDown,
        Keys.Ignore,
    }
)


def key_name(key_press: KeyPress) -> str:
    key = key_press.key
    return key.value if isinstance(key, Keys) else key


def event_chord(event: KeyPressEvent) -> tuple[str, ...]:
    """Key names of the sequence that triggered `event`."""
    return tuple(key_name(key_press) for key_press in event.key_sequence)


def pass_through(
    event: KeyPressEvent,
    key_presses: Sequence[KeyPress] | None = None,
    process: bool = False,
) -> None:
    """Push `key_presses` (default: those of `event`) back to the front of the
    host's input queue."""
    if key_presses is None:
        key_presses = event.key_sequence
    key_processor = event.app.key_processor
    key_processor.feed_multiple(list(key_presses), first=True)
    if process:
        key_processor.process_keys()


def _wants_key() -> bool:
    key_buffer = get_app().key_processor.key_buffer
    return not key_buffer or key_buffer[-1].key not in PASSIVE_KEYS


def _no_undo_snapshot(_: KeyPressEvent) -> bool:
    return False


class TransientKeyBindings:
    """The interception layer of one controller."""

    def __init__(self, controller: HydrakeyController) -> None:
        self.controller = controller
        self.key_bindings = KeyBindings()
        self._handler: Callable | None = None
        self._pending: list[KeyPress] = []
        self._intercepting = Condition(controller.is_active) & Condition(_wants_key)

    @property
    def installed(self) -> bool:
        return self._handler is not None

    @property
    def pending(self) -> tuple[str, ...]:
        """Keys held while waiting for the rest of a multi-key chord."""
        return tuple(key_name(key_press) for key_press in self._pending)

    def install(self, registry: BindingRegistry) -> None:
        """Start intercepting keys for `registry`, dropping any held keys."""
        self.uninstall()
        handler = self._key_handler
        self.key_bindings.add(
            Keys.Any,
            filter=self._intercepting,
            eager=True,
            save_before=_no_undo_snapshot,
        )(handler)
        self._handler = handler
        logger.debug("[%s] Intercepting keys.", registry.menu_id)

    def uninstall(self) -> None:
        self._pending.clear()
        if self._handler is not None:
            self.key_bindings.remove(self._handler)
            self._handler = None

    def _key_handler(self, event: KeyPressEvent):
        key_presses = self._pending + list(event.key_sequence)
        keys = tuple(key_name(key_press) for key_press in key_presses)
        registry = self.controller.active_registry
        if registry is not None and keys not in registry and registry.is_prefix(keys):
            self._pending = key_presses
            return None
        self._pending = []
        return self._deliver(event, keys, key_presses)

    async def _deliver(
        self,
        event: KeyPressEvent,
        keys: tuple[str, ...],
        key_presses: list[KeyPress],
    ) -> ExecutionContext | None:
        context = await self.controller.dispatch(keys)
        if context is None or context.extra.get("reason") == "unmatched":
            pass_through(event, key_presses, process=True)
        return context
