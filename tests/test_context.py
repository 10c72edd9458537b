from hydrakey.context import ExecutionContext


def test_context_success_line():
    context = ExecutionContext(name="undo", menu_id="undo-tree", chord=("c-x", "u"))
    context.start_timer()
    context.result = 3
    context.stop_timer()
    assert context.success
    assert context.status == "OK"
    assert context.duration is not None and context.duration >= 0
    line = context.to_log_line()
    assert line.startswith("[undo-tree:c-x u] undo status=OK")
    assert "exception=None" in line
    assert "Result: 3" in str(context)


def test_context_error_line():
    context = ExecutionContext(name="save", exception=RuntimeError("disk full"))
    assert not context.success
    assert context.status == "ERROR"
    assert context.duration is None
    line = context.to_log_line()
    assert "duration=n/a" in line
    assert "exception=RuntimeError: disk full" in line
