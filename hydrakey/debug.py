# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""debug.py"""
from hydrakey.context import ExecutionContext
from hydrakey.hook_manager import HookManager, HookType
from hydrakey.logger import logger


def log_before(context: ExecutionContext):
    """Log the start of a dispatched action."""
    chord = " ".join(context.chord or ())
    logger.info("[%s] '%s' -> %s", context.menu_id, chord, context.name)


def log_success(context: ExecutionContext):
    """Log the successful completion of an action."""
    result_str = repr(context.result)
    if len(result_str) > 100:
        result_str = f"{result_str[:100]} ..."
    logger.debug("[%s] Success -> Result: %s", context.name, result_str)


def log_after(context: ExecutionContext):
    """Log the completion of an action, regardless of success or failure."""
    logger.debug("[%s] Finished in %.3fs", context.name, context.duration)


def log_error(context: ExecutionContext):
    """Log an error that occurred during the action."""
    logger.error(
        "[%s] Error (%s): %s",
        context.name,
        type(context.exception).__name__,
        context.exception,
        exc_info=context.exception,
    )


def log_activate(context: ExecutionContext):
    logger.debug("[%s] Menu activated.", context.menu_id)


def log_deactivate(context: ExecutionContext):
    logger.debug(
        "[%s] Menu deactivated (%s).", context.menu_id, context.extra.get("reason")
    )


def register_debug_hooks(hooks: HookManager):
    hooks.register(HookType.BEFORE, log_before)
    hooks.register(HookType.AFTER, log_after)
    hooks.register(HookType.ON_SUCCESS, log_success)
    hooks.register(HookType.ON_ERROR, log_error)
    hooks.register(HookType.ON_ACTIVATE, log_activate)
    hooks.register(HookType.ON_DEACTIVATE, log_deactivate)
