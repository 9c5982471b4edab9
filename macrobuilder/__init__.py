from .builder import MacroBuilder
from .config_manager import JsonSettingsLookup, load_settings, save_settings
from .host import HostSession, SettingsLookup
from .models import Command, RunResult, RunStatus
from .runner import MacroRunner, create_runner
from .slots import SlotAllocator, default_allocator

__all__ = [
    "Command",
    "HostSession",
    "JsonSettingsLookup",
    "MacroBuilder",
    "MacroRunner",
    "RunResult",
    "RunStatus",
    "SettingsLookup",
    "SlotAllocator",
    "create_runner",
    "default_allocator",
    "load_settings",
    "save_settings",
]
