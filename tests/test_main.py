from argparse import Namespace

from hydrakey.__main__ import Window, build_controller, get_root_parser
from hydrakey.hint_bar import HintBar
from hydrakey.options_manager import OptionsManager


def test_root_parser_flags():
    args = get_root_parser().parse_args(["--exit-key", "escape", "--never-prompt"])
    assert args.exit_key == "escape"
    assert args.never_prompt is True
    assert args.debug_hooks is False

    args = get_root_parser().parse_args([])
    assert args.exit_key is None
    assert args.never_prompt is None


def test_window_resize_clamps():
    window = Window(width=11, height=6)
    window.narrower()
    window.narrower()
    window.shorter()
    window.shorter()
    assert str(window) == "10x5"
    assert window.balance() == "80x24"


def test_build_controller_defines_demo_menus():
    options = OptionsManager()
    options.set("exit_key", "q")
    controller, undo_menu, window_menu = build_controller(
        options, Namespace(debug_hooks=False), HintBar()
    )
    assert undo_menu.menu_id == "undo"
    assert window_menu.menu_id == "window"
    assert "undo/activate" in controller.commands
    assert "window/balance" in controller.commands
    assert len(controller.catalog) == 2
