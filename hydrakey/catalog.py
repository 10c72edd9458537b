# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""catalog.py

Menu definitions and the catalog that stores their compiled registries by name.

Redefining a name replaces the stored registry; nothing is ever evicted otherwise.
"""
from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hydrakey.exceptions import InvalidMenuError, UndefinedMenuError
from hydrakey.logger import logger
from hydrakey.registry import BindingRegistry, KeyChord, compile_bindings


class MenuDefinition(BaseModel):
    """Raw input of one `define` call."""

    name: str
    repeat: list[tuple[Any, Any]] = Field(default_factory=list)
    quit: list[tuple[Any, Any]] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Menu name must not be empty.")
        return value

    def compile(self, exit_key: KeyChord | None = None) -> BindingRegistry:
        return compile_bindings(self.name, self.repeat, self.quit, exit_key)


class MenuCatalog:
    """Maps menu names to their most recently compiled `BindingRegistry`."""

    def __init__(self) -> None:
        self._menus: dict[str, BindingRegistry] = {}

    def store(self, registry: BindingRegistry) -> None:
        if registry.name in self._menus:
            logger.debug("Menu '%s' redefined.", registry.name)
        self._menus[registry.name] = registry

    def get(self, name: str) -> BindingRegistry:
        try:
            return self._menus[name]
        except KeyError:
            raise UndefinedMenuError(f"No such menu: '{name}'.") from None

    def __contains__(self, name: object) -> bool:
        return name in self._menus

    def __iter__(self) -> Iterator[str]:
        return iter(self._menus)

    def __len__(self) -> int:
        return len(self._menus)


def build_definition(
    name: str, repeat: Any = None, quit: Any = None
) -> MenuDefinition:
    """Validate `define` arguments into a `MenuDefinition`."""
    if not isinstance(name, str):
        raise InvalidMenuError(f"Menu name must be a string, got {name!r}.")
    try:
        return MenuDefinition(name=name, repeat=list(repeat or []), quit=list(quit or []))
    except ValueError as error:
        raise InvalidMenuError(f"Invalid menu '{name}': {error}") from error
