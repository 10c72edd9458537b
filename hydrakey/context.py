# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Execution context for Hydrakey dispatches and menu lifecycle events.

An `ExecutionContext` is created for every key dispatched through an active menu
and for every activation/deactivation. It records which menu and chord were
involved, what was invoked, the result or exception, and timing. Hooks receive the
context, and `HydrakeyController.dispatch` returns it so callers can inspect the
outcome (e.g. `context.exception` after a failed action).
"""
from __future__ import annotations

import time
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console

from hydrakey.console import console


class ExecutionContext(BaseModel):
    """
    Runtime metadata for a single dispatch or lifecycle transition.

    Attributes:
        name (str): Human-readable name of what ran (action, menu, or "exit").
        menu_id (str | None): Id of the menu the event belongs to.
        chord (tuple[str, ...] | None): The key chord that was dispatched.
        action (Any): The bound action, command, or registry involved.
        result (Any | None): The result of the action, if successful.
        exception (BaseException | None): The exception raised, if any.
        deactivated (bool): Whether the event closed the menu.
        extra (dict): Free-form metadata (e.g. the deactivation reason).
    """

    name: str
    menu_id: str | None = None
    chord: tuple[str, ...] | None = None
    action: Any = None
    result: Any | None = None
    exception: BaseException | None = None
    deactivated: bool = False

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    extra: dict[str, Any] = Field(default_factory=dict)
    console: Console = console

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def start_timer(self):
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self):
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def to_log_line(self) -> str:
        """Structured flat-line format for logging."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        chord_str = " ".join(self.chord) if self.chord else "-"
        return (
            f"[{self.menu_id}:{chord_str}] {self.name} status={self.status} "
            f"duration={duration_str} deactivated={self.deactivated} "
            f"exception={exception_str}"
        )

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        result_str = (
            f"Result: {repr(self.result)}"
            if self.success
            else f"Exception: {self.exception}"
        )
        return (
            f"<ExecutionContext '{self.name}' | {self.status} | "
            f"Duration: {duration_str} | {result_str}>"
        )
