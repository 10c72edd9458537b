"""
Hydrakey Transient Menus

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .action import BoundAction, Callback, CommandRef
from .command import Command, CommandTable
from .controller import ActivationCommand, ActivationState, HydrakeyController
from .hint_bar import ConsoleHintDisplay, HintBar, NullHintDisplay
from .hook_manager import HookManager, HookType
from .options_manager import OptionsManager
from .registry import BindingRegistry, compile_bindings
from .slug import slugify
from .version import __version__

logger = logging.getLogger("hydrakey")

__all__ = [
    "HydrakeyController",
    "ActivationCommand",
    "ActivationState",
    "__version__",
    "BindingRegistry",
    "BoundAction",
    "Callback",
    "Command",
    "CommandRef",
    "CommandTable",
    "ConsoleHintDisplay",
    "HintBar",
    "HookManager",
    "HookType",
    "NullHintDisplay",
    "OptionsManager",
    "compile_bindings",
    "slugify",
]
