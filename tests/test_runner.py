"""MacroRunner write / dispatch / cleanup lifecycle."""

import os
import threading

import pytest

from macrobuilder.builder import MacroBuilder
from macrobuilder.models import RunStatus
from macrobuilder.runner import MacroRunner, create_runner

from .conftest import DictSettings, FakeHost


def _files(d):
    return sorted(p.name for p in d.iterdir())


def test_run_writes_executes_and_cleans_up(macro_dir, make_runner):
    seen = {}

    def on_run(path):
        # Host compiles next to the source while the macro runs
        seen["script"] = (macro_dir / "macro_04.cs").read_text(encoding="utf-8")
        (macro_dir / "macro_04.dll").write_bytes(b"dll")
        (macro_dir / "macro_04.pdb").write_bytes(b"pdb")

    host = FakeHost(on_run=on_run)
    runner = make_runner(host)
    result = MacroBuilder().callback("acmd_partnumbers_all").run(runner)

    assert result.ok
    assert result.file_name == "macro_04.cs"
    assert host.submitted == ["..\\macro_04.cs"]
    assert seen["script"].startswith("namespace Tekla.Technology.Akit.UserScript {")
    assert 'akit.Callback("acmd_partnumbers_all", "", "main_frame");\n}}}' in seen["script"]
    assert _files(macro_dir) == []


def test_successive_runs_rotate_file_names(make_runner):
    host = FakeHost()
    runner = make_runner(host)
    b = MacroBuilder().command_end()
    names = [b.run(runner).file_name for _ in range(3)]
    assert names == ["macro_04.cs", "macro_05.cs", "macro_06.cs"]


def test_drawing_mode_rebases_path(make_runner):
    host = FakeHost(drawing=True)
    make_runner(host).run_script("")
    assert host.submitted == ["..\\drawings\\..\\macro_04.cs"]


def test_disconnected_host_is_silent_noop(macro_dir, make_runner):
    host = FakeHost(connected=False)
    runner = make_runner(host)
    errors = []
    runner.err_line.connect(lambda name, msg: errors.append(msg))
    result = runner.run_script("akit.CommandEnd();\n")
    assert result.status == RunStatus.SKIPPED
    assert result.error is None
    assert host.submitted == []
    assert host.polls == 0
    assert errors == []
    assert _files(macro_dir) == []


def test_run_macro_appends_extension(make_runner):
    host = FakeHost()
    runner = make_runner(host)
    assert runner.run_macro("..\\custom") == RunStatus.COMPLETED
    assert runner.run_macro("..\\other.cs") == RunStatus.COMPLETED
    assert host.submitted == ["..\\custom.cs", "..\\other.cs"]


def test_waits_while_host_busy(make_runner):
    host = FakeHost(busy_polls=3)
    result = make_runner(host).run_script("")
    assert result.status == RunStatus.COMPLETED
    assert host.polls == 4
    assert len(host.submitted) == 1


def test_wait_timeout_skips_submission(macro_dir, make_runner):
    host = FakeHost(busy_polls=None)
    result = make_runner(host, wait_timeout=0.01).run_script("")
    assert result.status == RunStatus.TIMED_OUT
    assert host.submitted == []
    assert _files(macro_dir) == []


def test_cancel_aborts_pending_wait(make_runner):
    host = FakeHost(busy_polls=None)
    runner = make_runner(host, poll_interval=0.01)
    results = []
    t = threading.Thread(target=lambda: results.append(runner.run_script("")))
    t.start()
    while host.polls < 2:
        pass
    runner.cancel()
    t.join(timeout=5)
    assert not t.is_alive()
    assert results[0].status == RunStatus.CANCELLED
    assert host.submitted == []


def test_missing_macro_directory_is_reported_not_raised(host):
    runner = MacroRunner(host, DictSettings({}), poll_interval=0.001)
    errors = []
    runner.err_line.connect(lambda name, msg: errors.append((name, msg)))
    result = runner.run_script("")
    assert result.status == RunStatus.FAILED
    assert isinstance(result.error, FileNotFoundError)
    assert host.submitted == []
    assert len(errors) == 1


def test_write_failure_is_reported_not_raised(tmp_path, host, capsys):
    runner = MacroRunner(host, DictSettings({"XS_MACRO_DIRECTORY": str(tmp_path / "missing")}))
    result = runner.run_script("")
    assert result.status == RunStatus.FAILED
    assert isinstance(result.error, OSError)
    assert host.submitted == []
    assert "Warning:" in capsys.readouterr().out


def test_host_io_error_is_swallowed_after_cleanup(macro_dir, make_runner):
    def on_run(path):
        raise PermissionError("host locked the file")

    result = make_runner(FakeHost(on_run=on_run)).run_script("")
    assert result.status == RunStatus.FAILED
    assert isinstance(result.error, PermissionError)
    assert _files(macro_dir) == []


def test_host_non_io_error_propagates_after_cleanup(macro_dir, make_runner):
    def on_run(path):
        (macro_dir / "macro_04.dll").write_bytes(b"dll")
        raise RuntimeError("compile failed")

    with pytest.raises(RuntimeError):
        make_runner(FakeHost(on_run=on_run)).run_script("")
    assert _files(macro_dir) == []


def test_cleanup_ignores_missing_files(macro_dir, make_runner):
    runner = make_runner(FakeHost())
    (macro_dir / "macro_09.cs").write_text("x", encoding="utf-8")
    runner.cleanup(str(macro_dir), "macro_09.cs")
    runner.cleanup(str(macro_dir), "macro_09.cs")
    assert _files(macro_dir) == []


def test_signals_report_lifecycle(make_runner):
    runner = make_runner(FakeHost())
    events = []
    runner.macro_started.connect(lambda name: events.append(("started", name)))
    runner.macro_finished.connect(lambda name, status: events.append(("finished", name, status)))
    runner.run_script("")
    assert events == [("started", "macro_04.cs"), ("finished", "macro_04.cs", "completed")]


def test_emit_logs_disabled_suppresses_signals(make_runner, capsys):
    runner = make_runner(FakeHost(), emit_logs=False)
    events = []
    runner.macro_started.connect(events.append)
    runner.err_line.connect(lambda name, msg: events.append(msg))
    runner.run_script("")
    runner.settings = DictSettings({})
    runner.run_script("")
    assert events == []
    assert "Warning:" in capsys.readouterr().out


def test_create_runner_from_settings(macro_dir):
    host = FakeHost()
    runner = create_runner(host, {
        "advanced_options": {"XS_MACRO_DIRECTORY": str(macro_dir)},
        "poll_interval": 0.5,
        "wait_timeout": 3,
        "emit_logs": False,
    })
    assert runner.poll_interval == 0.5
    assert runner.wait_timeout == 3
    assert runner.emit_logs is False
    assert runner.run_script("").ok
    assert len(host.submitted) == 1


def test_cleanup_tries_every_file_before_raising(macro_dir, make_runner, monkeypatch):
    runner = make_runner(FakeHost())
    for name in ("macro_04.cs", "macro_04.dll", "macro_04.pdb"):
        (macro_dir / name).write_bytes(b"x")
    real_remove = os.remove

    def locked_remove(path):
        if path.endswith(".cs"):
            raise PermissionError(path)
        real_remove(path)

    monkeypatch.setattr(os, "remove", locked_remove)
    with pytest.raises(PermissionError):
        runner.cleanup(str(macro_dir), "macro_04.cs")
    assert _files(macro_dir) == ["macro_04.cs"]
