"""Interfaces of the host application consumed by the runner."""
from typing import Protocol


class SettingsLookup(Protocol):
    def get_advanced_option(self, key: str) -> str:
        """Return the value of a host advanced option, empty if unset."""
        ...


class HostSession(Protocol):
    def is_connected(self) -> bool:
        ...

    def has_active_drawing(self) -> bool:
        ...

    def is_macro_running(self) -> bool:
        ...

    def run_macro(self, macro_path: str) -> None:
        ...
