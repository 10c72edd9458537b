"""
Hydrakey Transient Menus

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import logging
from argparse import ArgumentParser, Namespace
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.application import get_app
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings
from prompt_toolkit.patch_stdout import patch_stdout

from hydrakey.console import console
from hydrakey.controller import HydrakeyController
from hydrakey.hint_bar import HintBar
from hydrakey.logger import logger
from hydrakey.options_manager import OptionsManager
from hydrakey.signals import QuitSignal
from hydrakey.themes import OneColors
from hydrakey.utils import setup_logging
from hydrakey.version import __version__


def get_root_parser(prog: str = "hydrakey") -> ArgumentParser:
    parser = ArgumentParser(
        prog=prog,
        description="Hydrakey demo - transient command menus in a prompt.",
        epilog="Press Ctrl-X U for the Undo menu and Ctrl-X W for the Window menu.",
    )
    parser.add_argument(
        "--exit-key",
        type=str,
        default=None,
        help="Key that closes any open menu (empty string disables it).",
    )
    parser.add_argument(
        "--never-prompt",
        action="store_true",
        default=None,
        help="Skip confirmation prompts of host commands.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    parser.add_argument(
        "--debug-hooks",
        action="store_true",
        help="Log every dispatched action through the debug hooks.",
    )
    parser.add_argument(
        "--version", action="store_true", help=f"Show {prog} version"
    )
    return parser


class Window:
    """Pretend window whose size the Window menu adjusts."""

    def __init__(self, width: int = 80, height: int = 24) -> None:
        self.width = width
        self.height = height

    def resize(self, d_width: int = 0, d_height: int = 0) -> str:
        self.width = max(self.width + d_width, 10)
        self.height = max(self.height + d_height, 5)
        console.print(f"[{OneColors.CYAN}]window[/] {self}")
        return str(self)

    def narrower(self) -> str:
        return self.resize(d_width=-1)

    def wider(self) -> str:
        return self.resize(d_width=1)

    def taller(self) -> str:
        return self.resize(d_height=1)

    def shorter(self) -> str:
        return self.resize(d_height=-1)

    def balance(self) -> str:
        return self.resize(80 - self.width, 24 - self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def undo() -> None:
    get_app().current_buffer.undo()


def redo() -> None:
    get_app().current_buffer.redo()


def build_controller(options: OptionsManager, args: Namespace, hint_bar: HintBar):
    controller = HydrakeyController(
        hint_display=hint_bar,
        options=options,
        logging_hooks=args.debug_hooks,
    )
    window = Window()
    controller.commands.add_command(
        "buffer/clear",
        lambda: get_app().current_buffer.reset(),
        description="Clear the input line",
    )
    controller.commands.add_command(
        "window/balance",
        window.balance,
        description="Reset the window size",
    )
    undo_menu = controller.define(
        "Undo",
        repeat=[("u", undo), ("r", redo)],
        quit=[("c", "buffer/clear")],
    )
    window_menu = controller.define(
        "Window",
        repeat=[
            ("{", window.narrower),
            ("}", window.wider),
            ("^", window.taller),
            ("v", window.shorter),
            ("u", "undo/activate"),
        ],
        quit=[("=", "window/balance")],
    )
    return controller, undo_menu, window_menu


async def run(args: Namespace) -> None:
    options = OptionsManager()
    options.from_namespace(
        Namespace(exit_key=args.exit_key, never_prompt=args.never_prompt)
    )
    hint_bar = HintBar()
    controller, undo_menu, window_menu = build_controller(options, args, hint_bar)

    host_bindings = KeyBindings()
    undo_menu.bind(host_bindings, "c-x", "u")
    window_menu.bind(host_bindings, "c-x", "w")

    session: PromptSession = PromptSession(
        message=[(OneColors.BLUE_b, "hydrakey > ")],
        key_bindings=merge_key_bindings([host_bindings, controller.key_bindings]),
        bottom_toolbar=hint_bar.render,
        interrupt_exception=QuitSignal,
        eof_exception=QuitSignal,
    )
    console.print(
        f"[{OneColors.GREEN_b}]Hydrakey {__version__}[/] "
        f"Ctrl-X U: Undo menu, Ctrl-X W: Window menu, Ctrl-C: quit."
    )
    while True:
        try:
            with patch_stdout(raw=True):
                text = await session.prompt_async()
        except QuitSignal:
            logger.info("[QuitSignal]. <- Exiting demo.")
            break
        if text:
            console.print(f"[{OneColors.COMMENT_GREY}]You typed:[/] {text}")


def main() -> Any:
    args = get_root_parser().parse_args()
    if args.version:
        console.print(f"hydrakey {__version__}")
        return None
    setup_logging(console_log_level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(run(args))


if __name__ == "__main__":
    main()
