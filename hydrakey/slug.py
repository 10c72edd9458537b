# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns human-readable menu names into stable identifier fragments.

    slugify("Undo Tree!")   -> "undo-tree"
    slugify("  Window  ")  -> "window"
    slugify("Café Menü")   -> "café-menü"

Menu ids are used for display and command-table lookup only; two names that
slugify to the same id are not detected.
"""
import re
from typing import Any

_NON_ALNUM = re.compile(r"[\W_]+")


def slugify(value: Any) -> str:
    """Lowercase `value` and collapse every run of non-alphanumerics into one `-`.

    Non-string input yields an empty string.
    """
    if not isinstance(value, str):
        return ""
    return _NON_ALNUM.sub("-", value.lower()).strip("-")
