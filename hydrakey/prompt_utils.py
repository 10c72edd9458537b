# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Utilities for the interactive prompts of host commands.

Includes:
- `should_prompt_user()` for conditional prompt logic.
- `confirm_async()` for interactive yes/no confirmation.
- `ask_async()` for free-text argument prompts.

Prompts run inside `prompt_toolkit.application.in_terminal`, which suspends the
rendering of an already running application (the host prompt the menu lives in)
for the duration of the question.
"""
from prompt_toolkit import PromptSession
from prompt_toolkit.application import in_terminal
from prompt_toolkit.formatted_text import (
    AnyFormattedText,
    FormattedText,
    merge_formatted_text,
)
from prompt_toolkit.validation import Validator

from hydrakey.options_manager import OptionsManager
from hydrakey.signals import CancelSignal
from hydrakey.themes import OneColors
from hydrakey.validators import yes_no_validator


def should_prompt_user(
    *,
    confirm: bool,
    options: OptionsManager,
    namespace: str = "settings",
) -> bool:
    """
    Determine whether to prompt the user based on command and global options.
    """
    if options.get("never_prompt", False, namespace):
        return False
    return confirm


async def confirm_async(
    message: AnyFormattedText = "Are you sure?",
    prefix: AnyFormattedText = FormattedText([(OneColors.CYAN, "❓ ")]),
    suffix: AnyFormattedText = FormattedText([(OneColors.LIGHT_YELLOW_b, " [Y/n] > ")]),
    session: PromptSession | None = None,
) -> bool:
    """Prompt the user with a yes/no async confirmation and return True for 'Y'."""
    session = session or PromptSession(interrupt_exception=CancelSignal)
    merged_message: AnyFormattedText = merge_formatted_text([prefix, message, suffix])
    async with in_terminal():
        answer = await session.prompt_async(
            merged_message,
            validator=yes_no_validator(),
        )
    return answer.upper() == "Y"


async def ask_async(
    message: str,
    validator: Validator | None = None,
    session: PromptSession | None = None,
) -> str:
    """Prompt the user for a single free-text value."""
    session = session or PromptSession(interrupt_exception=CancelSignal)
    prompt_message = merge_formatted_text(
        [FormattedText([(OneColors.BLUE_b, message)]), " > "]
    )
    async with in_terminal():
        return await session.prompt_async(prompt_message, validator=validator)
