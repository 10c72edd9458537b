# test_command.py
import pytest

from hydrakey.command import Command, CommandTable
from hydrakey.exceptions import CommandAlreadyExistsError, InvalidActionError
from hydrakey.hook_manager import HookManager, HookType
from hydrakey.options_manager import OptionsManager
from hydrakey.signals import CancelSignal


# --- Dummy Actions ---
async def dummy_action():
    return "ok"


def greet(name="world", punctuation="!"):
    return f"hello {name}{punctuation}"


# --- Tests ---
@pytest.mark.asyncio
async def test_command_creation():
    """Command wraps sync and async callables alike."""
    cmd = Command(id="buffer/save", description="Save buffer", action=dummy_action)
    assert cmd.id == "buffer/save"
    assert cmd.description == "Save buffer"
    assert await cmd() == "ok"

    sync_cmd = Command(id="greet", action=greet)
    assert await sync_cmd() == "hello world!"


def test_command_description_defaults_to_id():
    cmd = Command(id="buffer/save", action=dummy_action)
    assert cmd.description == "buffer/save"
    assert str(cmd) == "Command(id='buffer/save', description='buffer/save')"


def test_command_rejects_non_callable():
    with pytest.raises(InvalidActionError):
        Command(id="bad", action="not callable")


@pytest.mark.asyncio
async def test_command_static_args_and_kwargs():
    cmd = Command(id="greet", action=greet, args=("menus",), kwargs={"punctuation": "?"})
    assert await cmd() == "hello menus?"


@pytest.mark.asyncio
async def test_command_hooks_run_in_order():
    calls = []
    hooks = HookManager()
    hooks.register(HookType.BEFORE, lambda c: calls.append("before"))
    hooks.register(HookType.ON_SUCCESS, lambda c: calls.append(("success", c.result)))
    hooks.register(HookType.AFTER, lambda c: calls.append("after"))
    hooks.register(HookType.ON_TEARDOWN, lambda c: calls.append("teardown"))
    cmd = Command(id="save", action=dummy_action, hooks=hooks)
    await cmd()
    assert calls == ["before", ("success", "ok"), "after", "teardown"]


@pytest.mark.asyncio
async def test_command_error_propagates_after_hooks():
    calls = []
    hooks = HookManager()
    hooks.register("error", lambda c: calls.append(type(c.exception).__name__))

    def explode():
        raise RuntimeError("boom")

    cmd = Command(id="explode", action=explode, hooks=hooks)
    with pytest.raises(RuntimeError, match="boom"):
        await cmd()
    assert calls == ["RuntimeError"]


@pytest.mark.asyncio
async def test_never_prompt_skips_confirmation():
    options = OptionsManager()
    options.set("never_prompt", True)
    cmd = Command(
        id="buffer/clear", action=dummy_action, confirm=True, options_manager=options
    )
    assert await cmd() == "ok"


@pytest.mark.asyncio
async def test_declined_confirmation_cancels(monkeypatch):
    async def decline(*args, **kwargs):
        return False

    monkeypatch.setattr("hydrakey.command.confirm_async", decline)
    cmd = Command(id="buffer/clear", action=dummy_action, confirm=True)
    with pytest.raises(CancelSignal):
        await cmd()


@pytest.mark.asyncio
async def test_prompts_collect_missing_kwargs(monkeypatch):
    asked = []

    async def answer(message, validator=None, session=None):
        asked.append(message)
        return "prompted"

    monkeypatch.setattr("hydrakey.command.ask_async", answer)
    cmd = Command(
        id="greet",
        action=greet,
        kwargs={"punctuation": "."},
        prompts={"name": "Who?", "punctuation": "Ending?"},
    )
    assert await cmd() == "hello prompted."
    assert asked == ["Who?"]


@pytest.mark.asyncio
async def test_never_prompt_skips_argument_prompts():
    options = OptionsManager()
    options.set("never_prompt", True)
    cmd = Command(
        id="greet", action=greet, prompts={"name": "Who?"}, options_manager=options
    )
    assert await cmd() == "hello world!"


def test_command_table_register_and_get():
    options = OptionsManager()
    table = CommandTable(options)
    command = table.add_command("buffer/save", dummy_action, description="Save")
    assert table.get("buffer/save") is command
    assert "buffer/save" in table
    assert len(table) == 1
    assert command.options_manager is options
    assert table.get("missing") is None


def test_command_table_duplicate_ids():
    table = CommandTable()
    table.add_command("buffer/save", dummy_action)
    with pytest.raises(CommandAlreadyExistsError):
        table.add_command("buffer/save", dummy_action)
    replaced = table.add_command("buffer/save", greet, replace=True)
    assert table.get("buffer/save") is replaced


def test_command_table_register_rejects_other_types():
    table = CommandTable()
    with pytest.raises(InvalidActionError):
        table.register(dummy_action)
