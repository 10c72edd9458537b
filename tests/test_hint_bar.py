from io import StringIO

from prompt_toolkit.formatted_text import to_plain_text
from rich.console import Console

from hydrakey.hint_bar import ConsoleHintDisplay, HintBar, NullHintDisplay
from hydrakey.protocols import HintDisplayProtocol
from hydrakey.registry import compile_bindings


def undo():
    pass


def save():
    pass


def make_registry():
    return compile_bindings(
        "Undo Tree",
        repeat=[("u", undo), ("r", lambda: None)],
        quit=[("s", save)],
        exit_key="q",
    )


def test_displays_satisfy_protocol():
    assert isinstance(NullHintDisplay(), HintDisplayProtocol)
    assert isinstance(HintBar(), HintDisplayProtocol)
    assert isinstance(ConsoleHintDisplay(), HintDisplayProtocol)


def test_hint_bar_hidden_by_default():
    bar = HintBar()
    assert bar.visible is False
    assert bar.render() == ""


def test_hint_bar_renders_bindings():
    bar = HintBar(columns=2)
    registry = make_registry()
    bar.show_bindings(registry.menu_id, registry)
    assert bar.visible

    text = to_plain_text(bar.render())
    assert "undo-tree" in text
    assert "[u] undo" in text
    assert "[r] <lambda>" in text
    assert "[s] save" in text
    assert "[q] exit" in text
    # title row plus two rows of two bindings
    assert text.count("\n") == 2


def test_hint_bar_hide():
    bar = HintBar()
    registry = make_registry()
    bar.show_bindings(registry.menu_id, registry)
    bar.hide_bindings()
    assert bar.visible is False
    assert bar.menu_id is None
    assert bar.render() == ""


def test_console_hint_display_prints_table():
    output = StringIO()
    display = ConsoleHintDisplay(console_=Console(file=output, width=100))
    registry = make_registry()
    display.show_bindings(registry.menu_id, registry)
    printed = output.getvalue()
    assert "undo-tree" in printed
    assert "[u] undo" in printed
    assert "[q] exit" in printed
    display.hide_bindings()


def test_console_hint_display_table_rows():
    display = ConsoleHintDisplay(columns=3)
    registry = make_registry()
    table = display.build_table(registry.menu_id, registry)
    assert table.row_count == 2
