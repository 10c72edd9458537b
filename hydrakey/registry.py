# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""registry.py

Compiles a menu's bindings into a `BindingRegistry`: a mapping from key chord to
`BoundAction`.

Chords are prompt_toolkit key descriptors. A single key name (`"u"`, `"c-x"`,
`"escape"`) and a sequence of names (`("c-x", "u")`) are both accepted; a single
name is stored as a 1-tuple, so `"u"` and `("u",)` are the same chord. Aliases are
stored under the name prompt_toolkit reports for the key press (`"enter"` becomes
`"c-m"`, `"tab"` becomes `"c-i"`).

Compilation order is repeat bindings, then quit bindings, then the exit chord.
A later entry for the same chord replaces an earlier one, so the exit chord always
wins:

    registry = compile_bindings(
        "Undo",
        repeat=[("u", undo), ("r", redo)],
        quit=[("s", save)],
        exit_key="q",
    )
    registry[("u",)].auto_close   # False
    registry["q"].is_exit         # True
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Sequence, Union

from prompt_toolkit.keys import KEY_ALIASES, Keys

from hydrakey.action import EXIT_BINDING, BoundAction, wrap
from hydrakey.exceptions import InvalidMenuError
from hydrakey.logger import logger
from hydrakey.slug import slugify

KeyChord = Union[str, Sequence[str]]
Binding = tuple[KeyChord, Any]


def canonical_key(key: str) -> str:
    """Resolve aliases such as `"enter"` to the key name prompt_toolkit reports."""
    key = KEY_ALIASES.get(key, key)
    if key == "space":
        key = " "
    try:
        return Keys(key).value
    except ValueError:
        pass
    if len(key) != 1:
        raise InvalidMenuError(f"Invalid key: {key!r}")
    return key


def normalize_chord(chord: KeyChord) -> tuple[str, ...]:
    """Return `chord` as a non-empty tuple of canonical key names."""
    if isinstance(chord, str):
        keys: tuple[str, ...] = (chord,)
    elif isinstance(chord, (tuple, list)):
        keys = tuple(chord)
    else:
        raise InvalidMenuError(f"Key chord must be a string or a sequence: {chord!r}")
    if not keys or not all(isinstance(key, str) and key for key in keys):
        raise InvalidMenuError(f"Invalid key chord: {chord!r}")
    return tuple(canonical_key(key) for key in keys)


def format_chord(chord: tuple[str, ...]) -> str:
    return " ".join(chord)


@dataclass(frozen=True)
class BindingRegistry:
    """Compiled bindings of one menu."""

    name: str
    menu_id: str
    bindings: dict[tuple[str, ...], BoundAction] = field(default_factory=dict)

    def get(self, chord: KeyChord) -> BoundAction | None:
        return self.bindings.get(normalize_chord(chord))

    def __getitem__(self, chord: KeyChord) -> BoundAction:
        return self.bindings[normalize_chord(chord)]

    def __contains__(self, chord: object) -> bool:
        try:
            return normalize_chord(chord) in self.bindings  # type: ignore[arg-type]
        except InvalidMenuError:
            return False

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def is_prefix(self, keys: tuple[str, ...]) -> bool:
        """Whether `keys` starts a longer chord of this registry."""
        size = len(keys)
        return any(
            len(chord) > size and chord[:size] == keys for chord in self.bindings
        )

    def items(self):
        return self.bindings.items()

    def describe(self) -> list[tuple[str, str, bool]]:
        """Rows of (chord, action name, closes menu) in registration order."""
        return [
            (format_chord(chord), bound.name, bound.auto_close)
            for chord, bound in self.bindings.items()
        ]


def _insert(
    bindings: dict[tuple[str, ...], BoundAction],
    entries: Iterable[Binding],
    auto_close: bool,
    menu_id: str,
) -> None:
    for entry in entries:
        try:
            chord, action = entry
        except (TypeError, ValueError) as error:
            raise InvalidMenuError(
                f"[{menu_id}] Binding must be a (chord, action) pair: {entry!r}"
            ) from error
        keys = normalize_chord(chord)
        if keys in bindings:
            logger.debug(
                "[%s] Chord '%s' redefined; last binding wins.",
                menu_id,
                format_chord(keys),
            )
        bindings[keys] = wrap(action, auto_close)


def compile_bindings(
    name: str,
    repeat: Iterable[Binding] = (),
    quit: Iterable[Binding] = (),
    exit_key: KeyChord | None = None,
) -> BindingRegistry:
    """Build the `BindingRegistry` for a menu; see the module docstring for order."""
    menu_id = slugify(name)
    bindings: dict[tuple[str, ...], BoundAction] = {}
    _insert(bindings, repeat, False, menu_id)
    _insert(bindings, quit, True, menu_id)
    if exit_key:
        keys = normalize_chord(exit_key)
        if keys in bindings:
            logger.debug(
                "[%s] Exit chord '%s' shadows a menu binding.",
                menu_id,
                format_chord(keys),
            )
        bindings[keys] = EXIT_BINDING
    return BindingRegistry(name=name, menu_id=menu_id, bindings=bindings)
