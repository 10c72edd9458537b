# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Hint displays that show the bindings of the active menu.

- `NullHintDisplay`: the default; does nothing.
- `HintBar`: renders the active bindings as a prompt_toolkit bottom toolbar,
  laid out in columns. Pass `hint_bar.render` as `bottom_toolbar` of a
  `PromptSession`.
- `ConsoleHintDisplay`: prints a Rich table of the bindings when a menu opens.

Usage Example:
    bar = HintBar(columns=4)
    controller = HydrakeyController(hint_display=bar)
    session = PromptSession(bottom_toolbar=bar.render, ...)
"""
from __future__ import annotations

from html import escape

from prompt_toolkit.formatted_text import HTML, merge_formatted_text
from rich import box
from rich.console import Console
from rich.table import Table

from hydrakey.console import console
from hydrakey.registry import BindingRegistry
from hydrakey.themes import OneColors
from hydrakey.utils import chunks


class NullHintDisplay:
    """Hint display used when none is configured."""

    def show_bindings(self, menu_id: str, registry: BindingRegistry) -> None:
        pass

    def hide_bindings(self) -> None:
        pass


class HintBar:
    """
    Bottom toolbar listing the bindings of the active menu.

    Args:
        columns (int): Number of bindings per toolbar row.
        fg (str): Foreground color of the labels.
        bg_repeat (str): Background of bindings that keep the menu open.
        bg_quit (str): Background of bindings that close the menu.
    """

    def __init__(
        self,
        columns: int = 4,
        fg: str = OneColors.BLACK,
        bg_repeat: str = OneColors.GREEN,
        bg_quit: str = OneColors.LIGHT_YELLOW,
        title_bg: str = OneColors.BLUE,
    ) -> None:
        self.columns = columns
        self.console: Console = console
        self.fg = fg
        self.bg_repeat = bg_repeat
        self.bg_quit = bg_quit
        self.title_bg = title_bg
        self.menu_id: str | None = None
        self.registry: BindingRegistry | None = None

    @property
    def space(self) -> int:
        return max(self.console.width // self.columns, 1)

    @property
    def visible(self) -> bool:
        return self.registry is not None

    def show_bindings(self, menu_id: str, registry: BindingRegistry) -> None:
        self.menu_id = menu_id
        self.registry = registry

    def hide_bindings(self) -> None:
        self.menu_id = None
        self.registry = None

    def _render_item(self, chord: str, label: str, closes: bool) -> HTML:
        bg = self.bg_quit if closes else self.bg_repeat
        text = escape(f"[{chord}] {label}")
        return HTML(f"<style fg='{self.fg}' bg='{bg}'>{text:^{self.space}}</style>")

    def render(self):
        """Render the toolbar, or nothing while no menu is active."""
        if self.registry is None:
            return ""
        title = escape(f" {self.menu_id} ")
        lines = [HTML(f"<style fg='{self.fg}' bg='{self.title_bg}'>{title}</style>")]
        lines.append(HTML("\n"))
        for chunk in chunks(self.registry.describe(), self.columns):
            lines.extend(self._render_item(*row) for row in chunk)
            lines.append(HTML("\n"))
        return merge_formatted_text(lines[:-1])


class ConsoleHintDisplay:
    """Prints the bindings of a menu as a Rich table when it opens."""

    def __init__(self, columns: int = 3, console_: Console | None = None) -> None:
        self.columns = columns
        self.console: Console = console_ or console

    def build_table(self, menu_id: str, registry: BindingRegistry) -> Table:
        table = Table(title=menu_id, show_header=False, box=box.SIMPLE)
        cells = []
        for chord, label, closes in registry.describe():
            style = OneColors.LIGHT_YELLOW if closes else OneColors.GREEN
            cells.append(f"[{style}]\\[{chord}][/] {label}")
        for row in chunks(cells, self.columns):
            table.add_row(*row)
        return table

    def show_bindings(self, menu_id: str, registry: BindingRegistry) -> None:
        self.console.print(self.build_table(menu_id, registry), justify="center")

    def hide_bindings(self) -> None:
        pass
