# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Input validators for the prompts host commands show when invoked from a menu.

Included Validators:
- yes_no_validator: Restricts input to 'Y' or 'N'.
- required_validator: Rejects empty (or whitespace-only) input.
"""
from prompt_toolkit.validation import Validator


def yes_no_validator() -> Validator:
    """Validator for yes/no inputs."""

    def validate(text: str) -> bool:
        if text.upper() not in ["Y", "N"]:
            return False
        return True

    return Validator.from_callable(validate, error_message="Enter 'Y', 'y' or 'N', 'n'.")


def required_validator(label: str = "A value") -> Validator:
    """Validator for mandatory free-text inputs."""

    def validate(text: str) -> bool:
        return bool(text.strip())

    return Validator.from_callable(validate, error_message=f"{label} is required.")
