import asyncio
from io import StringIO
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from prompt_toolkit.application import Application
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.output import DummyOutput
from rich.console import Console

from hydrakey.controller import HydrakeyController
from hydrakey.key_bindings import event_chord, pass_through
from hydrakey.options_manager import OptionsManager


def make_event(*keys):
    return SimpleNamespace(
        key_sequence=[KeyPress(key) for key in keys],
        app=SimpleNamespace(key_processor=MagicMock()),
    )


@pytest.fixture
def controller():
    options = OptionsManager()
    options.set("exit_key", "q")
    return HydrakeyController(options=options, console=Console(file=StringIO()))


async def send_keys(controller, host, *chunks):
    """Run a real application with `host` bindings and type `chunks` into it."""
    with create_pipe_input() as pipe_input:
        app = Application(
            layout=Layout(Window()),
            key_bindings=merge_key_bindings([host, controller.key_bindings]),
            input=pipe_input,
            output=DummyOutput(),
        )
        task = asyncio.ensure_future(app.run_async())
        await asyncio.sleep(0.1)
        for chunk in chunks:
            pipe_input.send_text(chunk)
            await asyncio.sleep(0.1)
        app.exit()
        await task


def recorder(calls, label):
    def action(event=None):
        calls.append(label)

    action.__name__ = label
    return action


def test_event_chord_uses_key_names():
    assert event_chord(make_event(Keys.ControlX, "u")) == ("c-x", "u")
    assert event_chord(make_event(Keys.Escape)) == ("escape",)


def test_pass_through_feeds_keys_back():
    event = make_event("z")
    pass_through(event)
    processor = event.app.key_processor
    processor.feed_multiple.assert_called_once_with([KeyPress("z")], first=True)
    processor.process_keys.assert_not_called()

    held = [KeyPress(Keys.ControlX), KeyPress("z")]
    pass_through(event, held, process=True)
    processor.feed_multiple.assert_called_with(held, first=True)
    processor.process_keys.assert_called_once()


def test_install_and_uninstall(controller):
    controller.define("Undo", repeat=[("u", lambda: None), (("c-x", "r"), lambda: None)])
    assert controller.key_bindings.bindings == []

    controller.activate("Undo")
    [binding] = controller.key_bindings.bindings
    assert binding.keys == (Keys.Any,)
    assert binding.eager()
    assert binding.save_before(make_event("u")) is False

    controller.activate("Undo")
    assert len(controller.key_bindings.bindings) == 1

    controller.deactivate()
    assert controller.key_bindings.bindings == []


def test_binding_is_filtered_on_active_state(controller):
    controller.define("Undo", repeat=[("u", lambda: None)])
    controller.activate("Undo")
    binding = controller.key_bindings.bindings[0]
    assert binding.filter() is True
    controller._active_registry = None
    assert binding.filter() is False


@pytest.mark.asyncio
async def test_handler_dispatches_chord(controller):
    calls = []
    controller.define("Undo", repeat=[("u", recorder(calls, "undo"))])
    controller.activate("Undo")
    handler = controller.key_bindings.bindings[0].handler
    context = await handler(make_event("u"))
    assert calls == ["undo"]
    assert context.chord == ("u",)
    assert controller.is_active()


@pytest.mark.asyncio
async def test_handler_holds_chord_prefix(controller):
    calls = []
    controller.define("Undo", repeat=[(("c-x", "r"), recorder(calls, "redo"))])
    controller.activate("Undo")
    handler = controller.key_bindings.bindings[0].handler

    assert handler(make_event(Keys.ControlX)) is None
    assert controller._transient.pending == ("c-x",)
    context = await handler(make_event("r"))
    assert calls == ["redo"]
    assert context.chord == ("c-x", "r")
    assert controller._transient.pending == ()


@pytest.mark.asyncio
async def test_handler_passes_unmatched_keys_back(controller):
    controller.define("Undo", repeat=[(("c-x", "r"), lambda: None)])
    controller.activate("Undo")
    handler = controller.key_bindings.bindings[0].handler

    handler(make_event(Keys.ControlX))
    event = make_event("z")
    context = await handler(event)
    assert context.extra["reason"] == "unmatched"
    assert controller.is_active() is False
    event.app.key_processor.feed_multiple.assert_called_once_with(
        [KeyPress(Keys.ControlX), KeyPress("z")], first=True
    )
    event.app.key_processor.process_keys.assert_called_once()


@pytest.mark.asyncio
async def test_repeat_key_keeps_menu_open_in_application(controller):
    calls = []
    controller.define("Undo", repeat=[("u", recorder(calls, "u"))])
    controller.activate("Undo")
    await send_keys(controller, KeyBindings(), "uu")
    assert calls == ["u", "u"]
    assert controller.current_menu_id == "undo"


@pytest.mark.asyncio
async def test_quit_key_closes_menu_in_application(controller):
    calls = []
    controller.define(
        "Undo", repeat=[("u", recorder(calls, "u"))], quit=[("c", recorder(calls, "c"))]
    )
    controller.activate("Undo")
    await send_keys(controller, KeyBindings(), "uc", "u")
    assert calls == ["u", "c"]
    assert controller.is_active() is False


@pytest.mark.asyncio
async def test_exit_key_closes_menu_in_application(controller):
    calls = []
    controller.define("Undo", repeat=[("u", recorder(calls, "u"))])
    controller.activate("Undo")
    await send_keys(controller, KeyBindings(), "q", "u")
    assert calls == []
    assert controller.is_active() is False


@pytest.mark.asyncio
async def test_host_bound_key_closes_menu_and_reaches_host(controller):
    calls = []
    host = KeyBindings()
    host.add("c-a")(recorder(calls, "host-c-a"))
    host.add("enter")(recorder(calls, "host-enter"))
    controller.define("Undo", repeat=[("u", recorder(calls, "u"))])

    controller.activate("Undo")
    await send_keys(controller, host, "u\x01")
    assert calls == ["u", "host-c-a"]
    assert controller.is_active() is False

    controller.activate("Undo")
    await send_keys(controller, host, "\r")
    assert calls == ["u", "host-c-a", "host-enter"]
    assert controller.is_active() is False


@pytest.mark.asyncio
async def test_multi_key_chord_in_application(controller):
    calls = []
    host = KeyBindings()
    host.add("c-x")(recorder(calls, "host-c-x"))
    controller.define("Undo", repeat=[(("c-x", "r"), recorder(calls, "redo"))])
    controller.activate("Undo")
    await send_keys(controller, host, "\x18r")
    assert calls == ["redo"]
    assert controller.is_active()


@pytest.mark.asyncio
async def test_host_prefix_key_closes_menu_and_reaches_host(controller):
    calls = []
    host = KeyBindings()
    host.add("c-x")(recorder(calls, "host-c-x"))
    host.add("z")(recorder(calls, "host-z"))
    controller.define("Undo", repeat=[(("c-x", "r"), recorder(calls, "redo"))])
    controller.activate("Undo")
    await send_keys(controller, host, "\x18z")
    assert calls == ["host-c-x", "host-z"]
    assert controller.is_active() is False


@pytest.mark.asyncio
async def test_host_chord_opens_other_menu_in_application(controller):
    host = KeyBindings()
    undo_menu = controller.define("Undo", repeat=[("u", lambda: None)])
    controller.define("Window", repeat=[("{", lambda: None)])
    undo_menu.bind(host, "c-x", "u")
    controller.activate("Window")
    await send_keys(controller, host, "\x18u")
    assert controller.current_menu_id == "undo"


def test_activation_command_binds_to_host_bindings(controller):
    host = KeyBindings()
    undo_menu = controller.define("Undo")
    undo_menu.bind(host, "c-x", "u")
    binding = host.get_bindings_for_keys((Keys.ControlX, "u"))[0]
    binding.handler(make_event(Keys.ControlX, "u"))
    assert controller.current_menu_id == "undo"
