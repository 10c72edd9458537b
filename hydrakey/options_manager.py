# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Manages runtime settings for a Hydrakey controller across namespaces.

Settings live in `argparse.Namespace` objects keyed by namespace name. The default
namespace, "settings", is seeded with Hydrakey's own options:

- exit_key (str): chord that closes any active menu without running an action.
  Defaults to "q", or to the `HYDRAKEY_EXIT_KEY` environment variable when set.
  An empty string disables the exit binding.
- never_prompt (bool): skip confirmation and argument prompts of host commands.
- show_hints (bool): forward activation/deactivation to the hint display.

Parsed CLI arguments can be merged in with `from_namespace`, which is how the demo
entry point applies `--exit-key` and `--never-prompt`.

Typical Usage:
    options = OptionsManager()
    options.set("exit_key", "escape")
    if options.get("show_hints"):
        ...
    toggle_hints = options.get_toggle_function("show_hints")
"""
from __future__ import annotations

import os
from argparse import Namespace
from collections import defaultdict
from typing import Any, Callable

from hydrakey.logger import logger

DEFAULT_EXIT_KEY = "q"


def default_settings() -> Namespace:
    return Namespace(
        exit_key=os.getenv("HYDRAKEY_EXIT_KEY", DEFAULT_EXIT_KEY),
        never_prompt=False,
        show_hints=True,
    )


class OptionsManager:
    """
    Holds Hydrakey settings across multiple argparse namespaces.

    Supports dynamic retrieval, setting, and toggling of options. Values missing
    from a namespace fall back to the caller's default.
    """

    def __init__(self, namespaces: list[tuple[str, Namespace]] | None = None) -> None:
        self.options: defaultdict = defaultdict(Namespace)
        self.options["settings"] = default_settings()
        if namespaces:
            for namespace_name, namespace in namespaces:
                self.from_namespace(namespace, namespace_name)

    def from_namespace(
        self, namespace: Namespace, namespace_name: str = "settings"
    ) -> None:
        """Merge the non-None values of `namespace` into `namespace_name`."""
        target = self.options[namespace_name]
        for option_name, value in vars(namespace).items():
            if value is not None:
                setattr(target, option_name, value)

    def get(
        self, option_name: str, default: Any = None, namespace_name: str = "settings"
    ) -> Any:
        """Get the value of an option."""
        return getattr(self.options[namespace_name], option_name, default)

    def set(self, option_name: str, value: Any, namespace_name: str = "settings") -> None:
        """Set the value of an option."""
        setattr(self.options[namespace_name], option_name, value)
        logger.debug("Set '%s' in '%s' to %r", option_name, namespace_name, value)

    def has_option(self, option_name: str, namespace_name: str = "settings") -> bool:
        """Check if an option exists in the namespace."""
        return hasattr(self.options[namespace_name], option_name)

    def toggle(self, option_name: str, namespace_name: str = "settings") -> None:
        """Toggle a boolean option."""
        current = self.get(option_name, namespace_name=namespace_name)
        if not isinstance(current, bool):
            raise TypeError(
                f"Cannot toggle non-boolean option: '{option_name}' in '{namespace_name}'"
            )
        self.set(option_name, not current, namespace_name=namespace_name)

    def get_value_getter(
        self, option_name: str, namespace_name: str = "settings"
    ) -> Callable[[], Any]:
        """Get the value of an option as a getter function."""

        def _getter() -> Any:
            return self.get(option_name, namespace_name=namespace_name)

        return _getter

    def get_toggle_function(
        self, option_name: str, namespace_name: str = "settings"
    ) -> Callable[[], None]:
        """Get the toggle function for a boolean option."""

        def _toggle() -> None:
            self.toggle(option_name, namespace_name=namespace_name)

        return _toggle

    def get_namespace_dict(self, namespace_name: str) -> dict[str, Any]:
        """Return all options in a namespace as a dictionary."""
        if namespace_name not in self.options:
            raise ValueError(f"Namespace '{namespace_name}' not found.")
        return vars(self.options[namespace_name])
