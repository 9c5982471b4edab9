import pytest
from PySide6.QtCore import QCoreApplication

from macrobuilder.runner import MacroRunner
from macrobuilder.slots import SlotAllocator


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeHost:
    """Records submissions; optionally reports busy for a number of polls."""

    def __init__(self, connected=True, drawing=False, busy_polls=0, on_run=None):
        self.connected = connected
        self.drawing = drawing
        self.busy_polls = busy_polls
        self.on_run = on_run
        self.polls = 0
        self.submitted = []

    def is_connected(self):
        return self.connected

    def has_active_drawing(self):
        return self.drawing

    def is_macro_running(self):
        self.polls += 1
        if self.busy_polls is None:
            return True
        if self.busy_polls > 0:
            self.busy_polls -= 1
            return True
        return False

    def run_macro(self, macro_path):
        self.submitted.append(macro_path)
        if self.on_run is not None:
            self.on_run(macro_path)


class DictSettings:
    def __init__(self, options):
        self.options = options

    def get_advanced_option(self, key):
        return self.options.get(key, "")


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return self.value


@pytest.fixture
def macro_dir(tmp_path):
    d = tmp_path / "macros" / "modeling"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def make_runner(macro_dir):
    def _make(host, **kwargs):
        kwargs.setdefault("allocator", SlotAllocator(rng=FixedRandom(4)))
        kwargs.setdefault("poll_interval", 0.001)
        return MacroRunner(host, DictSettings({"XS_MACRO_DIRECTORY": str(macro_dir)}), **kwargs)
    return _make
