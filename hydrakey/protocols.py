# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Structural protocols for Hydrakey collaborators.

Protocols:
- HintDisplayProtocol: anything that can show the bindings of the active menu and
  hide them again. The controller only ever calls these two methods.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hydrakey.registry import BindingRegistry


@runtime_checkable
class HintDisplayProtocol(Protocol):
    def show_bindings(self, menu_id: str, registry: BindingRegistry) -> None: ...

    def hide_bindings(self) -> None: ...
