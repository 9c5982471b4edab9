import os
import threading
import time
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, Signal

from .config_manager import JsonSettingsLookup, load_settings
from .host import HostSession, SettingsLookup
from .models import RunResult, RunStatus
from .slots import SlotAllocator, default_allocator
from .utils import (
    DEFAULT_POLL_INTERVAL, DRAWINGS_PREFIX, EXT_CS, MACRO_DIRECTORY_OPTION,
    PARENT_PREFIX, byproduct_names, has_extension, wrap_script,
)


class MacroRunner(QObject):
    """
    Writes generated macros into the host's macro directory, runs them one at
    a time and removes them again.

    The host executes a single macro at a time and only exposes a polled
    "is a macro running" flag, so every submission waits for that flag to
    clear first.
    """
    macro_started = Signal(str)        # file_name
    macro_finished = Signal(str, str)  # file_name, RunStatus value
    err_line = Signal(str, str)        # file_name, message

    def __init__(self, host: HostSession, settings: SettingsLookup,
                 allocator: Optional[SlotAllocator] = None,
                 poll_interval: float = DEFAULT_POLL_INTERVAL,
                 wait_timeout: Optional[float] = None,
                 emit_logs: bool = True, parent=None):
        super().__init__(parent)
        self.host = host
        self.settings = settings
        self.allocator = allocator or default_allocator()
        self.poll_interval = poll_interval
        self.wait_timeout = wait_timeout
        self.emit_logs = bool(emit_logs)
        self._cancel = threading.Event()

    def run_script(self, body: str) -> RunResult:
        """
        Run accumulated command lines as one macro.

        The script file and its compile byproducts are deleted on every exit
        path. OSError from resolving, writing, running or deleting is reported
        and returned as a failed result; other errors from the host propagate.
        """
        file_name = self.allocator.next_name()
        try:
            macro_dir = self.settings.get_advanced_option(MACRO_DIRECTORY_OPTION)
            if not macro_dir:
                raise FileNotFoundError(f"Macro directory not configured: {MACRO_DIRECTORY_OPTION}")
            try:
                with open(os.path.join(macro_dir, file_name), "w", encoding="utf-8") as f:
                    f.write(wrap_script(body))
                if self.emit_logs:
                    self.macro_started.emit(file_name)
                status = self.run_macro(PARENT_PREFIX + file_name)
            finally:
                self.cleanup(macro_dir, file_name)
        except OSError as ex:
            self._report(file_name, f"Failed to run macro: {ex}")
            return RunResult(file_name=file_name, status=RunStatus.FAILED, error=ex)
        if self.emit_logs:
            self.macro_finished.emit(file_name, status.value)
        return RunResult(file_name=file_name, status=status)

    def run_macro(self, macro_name: str) -> RunStatus:
        """
        Submit a macro already present in the macro directory.

        Returns SKIPPED without contacting the host further when there is no
        active connection.
        """
        if self.host.has_active_drawing():
            macro_name = DRAWINGS_PREFIX + macro_name
        if not self.host.is_connected():
            return RunStatus.SKIPPED
        if not has_extension(macro_name):
            macro_name += EXT_CS

        blocked = self.wait_for_idle()
        if blocked is not None:
            return blocked
        self.host.run_macro(macro_name)
        return RunStatus.COMPLETED

    def wait_for_idle(self) -> Optional[RunStatus]:
        """
        Poll the host until no macro is running.

        Returns None once the host is idle, CANCELLED if cancel() was called
        meanwhile, or TIMED_OUT when wait_timeout elapses first.
        """
        self._cancel.clear()
        deadline = None
        if self.wait_timeout is not None:
            deadline = time.monotonic() + self.wait_timeout
        while self.host.is_macro_running():
            if self._cancel.is_set():
                return RunStatus.CANCELLED
            if deadline is not None and time.monotonic() >= deadline:
                return RunStatus.TIMED_OUT
            self._cancel.wait(self.poll_interval)
        return None

    def cancel(self):
        """Abort a pending wait_for_idle from another thread."""
        self._cancel.set()

    def cleanup(self, macro_dir: str, file_name: str):
        """Delete the script and its byproducts, re-raising the first failure after trying all."""
        first_error = None
        for name in byproduct_names(file_name):
            try:
                os.remove(os.path.join(macro_dir, name))
            except FileNotFoundError:
                continue
            except OSError as ex:
                if first_error is None:
                    first_error = ex
        if first_error is not None:
            raise first_error

    def _report(self, file_name: str, message: str):
        print(f"Warning: [{file_name}] {message}")
        if self.emit_logs:
            self.err_line.emit(file_name, message)


def create_runner(host: HostSession, settings: Optional[Dict[str, Any]] = None, parent=None) -> MacroRunner:
    """Build a runner configured from the settings file (or ``settings``)."""
    if settings is None:
        settings = load_settings()
    return MacroRunner(
        host=host,
        settings=JsonSettingsLookup(settings),
        poll_interval=settings.get("poll_interval", DEFAULT_POLL_INTERVAL),
        wait_timeout=settings.get("wait_timeout"),
        emit_logs=settings.get("emit_logs", True),
        parent=parent,
    )
